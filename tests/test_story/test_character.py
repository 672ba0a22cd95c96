import pytest
from pydantic import ValidationError
from story.character import Character, ShortName, character_name_to_filename

def test_names():
    c = Character(firstname="Ann", lastname="Smith", nickname="Annie")

    assert c.fullname == "Ann Smith"
    assert c.filename == "ann-smith"
    assert c.shortname == "Ann"

@pytest.mark.parametrize("short_name, expected", [
    (ShortName.FIRSTNAME, "Ann"),
    (ShortName.LASTNAME, "Smith"),
    (ShortName.NICKNAME, "Annie"),
    (ShortName.FULLNAME, "Ann Smith"),
])
def test_shortname_field(short_name, expected):
    c = Character(firstname="Ann", lastname="Smith", nickname="Annie", short_name=short_name)
    assert c.shortname == expected
    assert c.name_field("name") == expected

def test_name_field_lookup():
    c = Character(firstname="Ann", lastname="Smith", nickname="Annie")

    assert c.name_field("firstname") == "Ann"
    assert c.name_field("LastName") == "Smith"
    assert c.name_field("nickname") == "Annie"
    assert c.name_field("fullname") == "Ann Smith"
    assert c.name_field("age") is None

def test_portraits():
    c = Character(
        firstname="Ann",
        default_portrait="ann/default.png",
        portraits={"happy": "ann/happy.png"},
    )

    assert c.has_portrait("happy")
    assert not c.has_portrait("sad")
    assert c.get_portrait("happy") == "ann/happy.png"
    assert c.get_portrait("sad") == "ann/default.png"
    assert c.get_portrait() == "ann/default.png"

def test_no_portraits():
    assert Character(firstname="Ann").get_portrait() is None

def test_voice_pitch_range():
    assert Character(voice_pitch=0.35).voice_pitch == 0.35
    with pytest.raises(ValidationError):
        Character(voice_pitch=0.2)
    with pytest.raises(ValidationError):
        Character(voice_pitch=2.5)

def test_character_is_immutable():
    c = Character(firstname="Ann")
    with pytest.raises(ValidationError):
        c.firstname = "Bob"

def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        Character(firstname="Ann", age=30)

def test_short_name_from_string():
    assert Character(firstname="A", nickname="N", short_name="nickname").shortname == "N"

def test_filename_conversion():
    assert character_name_to_filename(" Mary Jane Watson ") == "mary-jane-watson"
