from setuptools import setup, find_packages

setup(
    name="rngquery",
    version="1.0.0",
    description="Small query language to use pseudorandomness the easy way",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["rq"],
    package_data={"rngquery": ["grammars/*.lark"]},
    include_package_data=True,
    install_requires=[
        "lark>=1.1",
        "pydantic>=2.0",
        "loguru>=0.7",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
    entry_points={
        "console_scripts": [
            "rq=rq:main",
        ],
    },
    python_requires=">=3.10",
)
