import pytest
from story.participant import Participant, set_participants

def names_of(participants):
    return [p.character.firstname for p in participants]

def test_single_name_adds_player(assets):
    participants = set_participants("Bob", assets)

    assert names_of(participants) == ["Alex", "Bob"]
    assert participants[0].character is assets.player

@pytest.mark.parametrize("name", ["player", "Player Only", "playeronly", " PLAYER "])
def test_player_only(assets, name):
    assert names_of(set_participants(name, assets)) == ["Alex"]

def test_none_gives_empty_list(assets):
    assert set_participants("None", assets) == []

def test_unknown_single_name_falls_back_to_player(assets, caplog):
    participants = set_participants("Zed", assets)

    assert names_of(participants) == ["Alex"]
    assert "Zed" in caplog.text

def test_many_names_in_given_order(assets):
    participants = set_participants("Bob, player, Ann Lee", assets)

    assert names_of(participants) == ["Bob", "Alex", "Ann"]

def test_many_names_skip_unknown_and_duplicates(assets):
    participants = set_participants("Bob,Zed,Rocky,Ann", assets)

    assert names_of(participants) == ["Bob", "Ann"]

def test_many_names_without_player(assets):
    assert names_of(set_participants("Bob, Ann", assets)) == ["Bob", "Ann"]

def test_missing_player_is_omitted(tmp_path):
    from engine.resources.database import AssetDatabase
    from story.character import Character

    db = AssetDatabase(tmp_path)
    db.add_character("bob", Character(firstname="Bob"))

    assert names_of(set_participants("Bob", db)) == ["Bob"]
    assert set_participants("player", db) == []

def test_participants_start_neutral(assets):
    bob = set_participants("Bob", assets)[1]

    assert bob.emotion == "neutral"
    assert bob.portrait == "bob/default.png"
    bob.emotion = "happy"
    assert bob.portrait == "bob/happy.png"

def test_participants_compare_by_identity(assets):
    first = Participant(assets.player)
    second = Participant(assets.player)

    assert first != second
    assert first == first
