import pytest

from smart_increment.counter import SequenceCounter


@pytest.mark.unit
class TestSequenceCounter:
    def test_advance_updates_and_returns(self):
        counter = SequenceCounter(1, 1, "item_001")
        assert counter.advance() == "item_002"
        assert counter.advance() == "item_003"
        assert counter.current_text == "item_003"

    def test_every_slot_moves_together(self):
        counter = SequenceCounter(1, 5, "x=1, y=10")
        assert counter.advance() == "x=6, y=15"

    def test_decrement_past_zero(self):
        counter = SequenceCounter(-1, 1, "n01")
        counter.advance()
        assert counter.advance() == "n-01"

    def test_fork_keeps_rule_not_text(self):
        counter = SequenceCounter(-1, 3, "a10\nb10")
        line_counter = counter.fork("a10")

        assert line_counter.advance() == "a07"
        assert counter.current_text == "a10\nb10"

    def test_direction_label(self):
        assert SequenceCounter(1, 1, "").direction_label == "+"
        assert SequenceCounter(-1, 1, "").direction_label == "-"
