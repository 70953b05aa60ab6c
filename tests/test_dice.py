"""Tests for dice roll parsing, rendering and evaluation."""
import random

import pytest

from rngquery.expr.dice import Roll, RollInvalid, RollNoMatch, SelectAction, SelectWhich


class TestParse:

    def test_simple(self):
        roll = Roll.parse("3d6")
        assert roll.amount == 3
        assert roll.sides == 6
        assert not roll.exploding
        assert roll.select is None
        assert roll.modifier == 0

    def test_default_amount(self):
        assert Roll.parse("d20").amount == 1

    def test_percent(self):
        assert Roll.parse("d%").sides == 100
        assert Roll.parse("2d%").sides == 100

    def test_exploding(self):
        assert Roll.parse("2d6!").exploding

    def test_select_defaults(self):
        keep = Roll.parse("4d6k").select
        assert (keep.action, keep.which, keep.amount) == (SelectAction.Keep, SelectWhich.High, 1)
        drop = Roll.parse("4d6d").select
        assert (drop.action, drop.which, drop.amount) == (SelectAction.Drop, SelectWhich.Low, 1)

    def test_select_explicit(self):
        sel = Roll.parse("4d6kl2").select
        assert (sel.action, sel.which, sel.amount) == (SelectAction.Keep, SelectWhich.Low, 2)
        sel = Roll.parse("4d6dh3").select
        assert (sel.action, sel.which, sel.amount) == (SelectAction.Drop, SelectWhich.High, 3)

    def test_modifiers_are_summed(self):
        assert Roll.parse("2d6+3").modifier == 3
        assert Roll.parse("2d6+3-5+1").modifier == -1
        assert Roll.parse("3d10!dl+2-1").modifier == 1

    def test_not_a_roll(self):
        for text in ("hello", "d", "2d", "dice", "d6 + 2", "2d6++1", "10"):
            with pytest.raises(RollNoMatch):
                Roll.parse(text)

    def test_zero_values_are_invalid(self):
        with pytest.raises(RollInvalid, match="amount can't be 0"):
            Roll.parse("0d6")
        with pytest.raises(RollInvalid, match="number of sides can't be 0"):
            Roll.parse("2d0")
        with pytest.raises(RollInvalid, match="select amount can't be 0"):
            Roll.parse("4d6k0")

    def test_too_large(self):
        with pytest.raises(RollInvalid, match="bad amount"):
            Roll.parse("70000d6")
        with pytest.raises(RollInvalid, match="bad number of sides"):
            Roll.parse("d65536")
        with pytest.raises(RollInvalid, match="bad modifier"):
            Roll.parse("d6+2147483647+1")


class TestRender:

    def test_amount_is_omitted_for_one_die(self):
        assert str(Roll.parse("1d20")) == "d20"
        assert str(Roll.parse("d20")) == "d20"
        assert str(Roll.parse("3d8")) == "3d8"
        assert str(Roll.parse("12d100")) == "12d100"

    def test_full_notation(self):
        assert str(Roll.parse("d%")) == "d100"
        assert str(Roll.parse("4d6kh3")) == "4d6k3"
        assert str(Roll.parse("4d6dl")) == "4d6d"
        assert str(Roll.parse("2d20kl")) == "2d20kl"
        assert str(Roll.parse("5d6dh2")) == "5d6dh2"
        assert str(Roll.parse("3d6!+2-4")) == "3d6!-2"


class TestRoll:

    def test_plain(self, scripted_rng):
        sample = Roll.parse("2d6").roll(scripted_rng([4, 5]))
        assert sample.total == 9
        assert sample.full() == "2d6: 9"
        assert sample.value() == "9"

    def test_modifier(self, scripted_rng):
        sample = Roll.parse("2d6+3").roll(scripted_rng([4, 5]))
        assert sample.total == 12
        assert sample.full() == "2d6+3: [4+5]+3 = 12"

    def test_keep_high(self, scripted_rng):
        sample = Roll.parse("4d6k3").roll(scripted_rng([6, 1, 4, 3]))
        assert sample.total == 13
        assert sample.full() == "4d6k3: [1d+3+4+6] = 13"

    def test_drop_low(self, scripted_rng):
        sample = Roll.parse("4d6d").roll(scripted_rng([5, 2, 6, 2]))
        assert sample.total == 13
        assert sample.full() == "4d6d: [2d+2+5+6] = 13"

    def test_keep_low_and_drop_high(self, scripted_rng):
        assert Roll.parse("3d6kl").roll(scripted_rng([5, 2, 6])).total == 2
        assert Roll.parse("3d6dh2").roll(scripted_rng([5, 2, 6])).total == 2

    def test_select_more_than_rolled(self, scripted_rng):
        assert Roll.parse("2d6k5").roll(scripted_rng([3, 4])).total == 7
        assert Roll.parse("2d6d5").roll(scripted_rng([3, 4])).total == 0

    def test_exploding_chains_into_the_group(self, scripted_rng):
        sample = Roll.parse("2d6!").roll(scripted_rng([6, 6, 2, 3]))
        assert [d.value for d in sample.dice] == [6, 6, 2, 3]
        assert sample.full() == "2d6!: [6+6+2+3] = 17"

    def test_one_sided_exploding_die_terminates(self):
        sample = Roll.parse("1d1!").roll(random.Random(3))
        assert [d.value for d in sample.dice] == [1]
        assert sample.total == 1

    def test_total_invariant(self):
        rng = random.Random(99)
        roll = Roll.parse("6d6!k3-2")
        for _ in range(200):
            sample = roll.roll(rng)
            assert len(sample.dice) >= 6
            assert all(1 <= d.value <= 6 for d in sample.dice)
            kept = [d.value for d in sample.dice if not d.dropped]
            assert len(kept) == 3
            assert sample.total == sum(kept) - 2
            assert sample.value() == str(sample.total)
