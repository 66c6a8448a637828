import pytest
from parley.script.sequencer import ScriptSequencer, SequenceState


@pytest.fixture
def sequencer():
    s = ScriptSequencer()
    s.define_labels({"begin": ["A", "B"], "finish": ["Z"]})
    return s


def test_starts_idle():
    s = ScriptSequencer()
    assert s.state is SequenceState.IDLE
    assert s.statements is None
    assert s.cursor == 0


def test_walk_label(sequencer):
    assert sequencer.start_label("begin") is True
    assert sequencer.state is SequenceState.ACTIVE
    assert sequencer.current_label == "begin"

    assert sequencer.take() == "A"
    assert sequencer.cursor == 1
    assert sequencer.take() == "B"
    assert sequencer.state is SequenceState.EXHAUSTED

    with pytest.raises(IndexError):
        sequencer.take()


def test_unknown_label_is_idle(sequencer):
    assert sequencer.start_label("nowhere") is False
    assert sequencer.state is SequenceState.IDLE


def test_start_label_resets_cursor(sequencer):
    sequencer.start_label("begin")
    sequencer.take()
    sequencer.start_label("begin")
    assert sequencer.cursor == 0


def test_unnamed_sequence(sequencer):
    sequencer.start_label("begin")
    sequencer.load_sequence(["X"])

    assert sequencer.current_label is None
    assert sequencer.statements == ["X"]
    assert sequencer.take() == "X"
    assert "X" not in sequencer.labels


def test_empty_sequence_is_exhausted():
    s = ScriptSequencer()
    s.load_sequence([])
    assert s.state is SequenceState.EXHAUSTED


def test_redefining_other_label_leaves_active_one(sequencer):
    sequencer.start_label("begin")
    sequencer.take()
    sequencer.define_labels({"finish": ["Y"]})

    assert sequencer.take() == "B"
    assert sequencer.labels["finish"] == ["Y"]


def test_redefining_active_label_applies_at_cursor(sequencer):
    sequencer.start_label("begin")
    sequencer.take()
    sequencer.define_labels({"begin": ["one", "two", "three"]})

    assert sequencer.cursor == 1
    assert sequencer.take() == "two"
    assert sequencer.take() == "three"


def test_defined_labels_are_copied(sequencer):
    statements = ["A"]
    sequencer.define_labels({"copy": statements})
    statements.append("B")
    assert sequencer.labels["copy"] == ["A"]


def test_reset(sequencer):
    sequencer.start_label("begin")
    sequencer.reset()
    assert sequencer.state is SequenceState.IDLE
    assert "begin" in sequencer.labels


def test_unknown_label_is_not_revived_by_later_definition(sequencer):
    sequencer.start_label("later")
    sequencer.define_labels({"later": ["Surprise"]})

    assert sequencer.current_label is None
    assert sequencer.state is SequenceState.IDLE
    with pytest.raises(IndexError):
        sequencer.take()
