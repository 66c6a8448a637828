import random
import pytest
from parley.core.errors import MalformedStatement, UnknownCharacter, UnknownExpression
from parley.core.models import ChoiceStatement
from parley.script.commands import CommandDispatcher
from parley.script.parser import StatementParser
from parley.script.registry import CharacterRegistry


@pytest.fixture
def parser(characters):
    registry = CharacterRegistry()
    registry.register(characters)
    commands = CommandDispatcher({"enableNextPrompt": lambda: None, "disableNextPrompt": lambda: None})
    commands.register("sayHi", lambda: None)
    return StatementParser(registry, commands, random.Random(7))


def test_plain_text_is_narrator(parser):
    intent = parser.parse("Hello world")

    assert intent.who == "narrator"
    assert intent.text == "Hello world"
    assert intent.commands == []
    assert intent.expression is None
    assert intent.side_image is None
    assert intent.source == "Hello world"


def test_speaker_and_expression(parser):
    intent = parser.parse("r:happy Hi")

    assert intent.who == "r"
    assert intent.expression == "happy"
    assert intent.side_image == "robot-happy"
    assert intent.text == "Hi"


def test_bare_key_uses_default_expression(parser):
    intent = parser.parse("t Hi")

    assert intent.who == "t"
    assert intent.expression == "happy"
    assert intent.side_image == "skuller"
    assert intent.text == "Hi"


def test_bare_key_without_default_expression(parser):
    intent = parser.parse("r Hello, I'm a robot!")

    assert intent.who == "r"
    assert intent.expression is None
    assert intent.side_image is None
    assert intent.text == "Hello, I'm a robot!"


def test_bare_key_strips_single_space(parser):
    assert parser.parse("r  indented").text == " indented"


def test_colon_form_strips_whitespace_run(parser):
    assert parser.parse("r:sad \t Oh no").text == "Oh no"


def test_colon_form_needs_trailing_whitespace(parser):
    intent = parser.parse("r:happy")
    assert intent.who == "narrator"
    assert intent.text == "r:happy"


def test_colon_form_wins_over_bare_key(parser):
    intent = parser.parse("t:happy r Hi")
    assert intent.who == "t"
    assert intent.text == "r Hi"


def test_key_must_be_followed_by_space(parser):
    intent = parser.parse("rHello")
    assert intent.who == "narrator"
    assert intent.text == "rHello"


def test_leading_command(parser):
    intent = parser.parse("disableNextPrompt r Hi")

    assert intent.commands == ["disableNextPrompt"]
    assert intent.who == "r"
    assert intent.text == "Hi"


def test_commands_keep_statement_order(parser):
    intent = parser.parse("sayHi disableNextPrompt r Hi")
    assert intent.commands == ["sayHi", "disableNextPrompt"]
    assert intent.text == "Hi"

    intent = parser.parse("disableNextPrompt sayHi sayHi Hi")
    assert intent.commands == ["disableNextPrompt", "sayHi", "sayHi"]
    assert intent.who == "narrator"


def test_commands_only_from_the_front(parser):
    intent = parser.parse("r sayHi to everyone")

    assert intent.commands == []
    assert intent.text == "sayHi to everyone"


def test_command_must_be_whole_word(parser):
    intent = parser.parse("sayHi! Hello")
    assert intent.commands == []
    assert intent.text == "sayHi! Hello"


def test_commands_only_statement(parser):
    intent = parser.parse("disableNextPrompt sayHi")

    assert intent.commands == ["disableNextPrompt", "sayHi"]
    assert intent.text == ""
    assert intent.who is None
    assert not intent.is_displayable


def test_commands_only_skips_character_lookup(parser):
    # Trailing whitespace is consumed with the last command
    intent = parser.parse("sayHi   ")
    assert intent.commands == ["sayHi"]
    assert intent.who is None


def test_unknown_expression(parser):
    with pytest.raises(UnknownExpression) as exc:
        parser.parse("r:angry Hi")
    assert exc.value.character == "r"
    assert exc.value.expression == "angry"


def test_unknown_speaker_in_colon_form(parser):
    with pytest.raises(UnknownCharacter):
        parser.parse("zed:happy Hi")


def test_default_expression_must_exist(parser):
    parser.characters.register({"g": {"expressions": {}, "default_expression": "smug"}})
    with pytest.raises(UnknownExpression):
        parser.parse("g Hi")


def test_alternatives_pick_one(parser):
    options = ["r Hi", "r Hello", "r Hey"]
    texts = {parser.parse(options).text for _ in range(50)}

    assert texts <= {"Hi", "Hello", "Hey"}
    assert len(texts) > 1


def test_alternatives_are_seeded(characters):
    def run(seed):
        registry = CharacterRegistry()
        registry.register(characters)
        parser = StatementParser(registry, CommandDispatcher(), random.Random(seed))
        return [parser.parse(["a", "b", "c", "d"]).text for _ in range(10)]

    assert run(3) == run(3)


def test_structured_statements(parser):
    intent = parser.parse(ChoiceStatement(statement="r:sad Which one?", type="multipleChoice"))
    assert intent.who == "r"
    assert intent.text == "Which one?"

    intent = parser.parse({"type": "multipleChoice", "statement": "t Which one?"})
    assert intent.who == "t"
    assert intent.text == "Which one?"


@pytest.mark.parametrize("statement", [
    [],
    [1, 2],
    {"type": "multipleChoice"},
    {"statement": 3},
    42,
    None,
])
def test_malformed_statements(parser, statement):
    with pytest.raises(MalformedStatement):
        parser.parse(statement)


def test_narrator_can_be_named_explicitly(parser):
    intent = parser.parse("narrator It was a dark night.")
    assert intent.who == "narrator"
    assert intent.text == "It was a dark night."
