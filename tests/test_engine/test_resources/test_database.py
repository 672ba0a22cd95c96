import pytest
import json
import shutil
from pathlib import Path
from engine.resources.database import AssetDatabase
from story.character import Character, ShortName

DATA_DIR = Path(__file__).parents[3] / "data"

@pytest.fixture
def mock_db_path(tmp_path):
    # Setup mock directory structure in tmp_path, with the shipped schemas
    shutil.copytree(DATA_DIR / "schemas", tmp_path / "schemas")

    database = tmp_path / "database"
    database.mkdir()
    (database / "characters").mkdir()
    (database / "sounds").mkdir()

    return tmp_path

def write_json(path, data):
    with open(path, "w") as f:
        json.dump(data, f)

def test_load_shipped_data():
    db = AssetDatabase(DATA_DIR)
    db.load_all()

    assert db.player.firstname == "Alex"
    bob = db.get_character("bob-stone")
    assert bob.short_name is ShortName.NICKNAME
    assert bob.shortname == "Rocky"
    assert db.get_sound("default-speech") == str(DATA_DIR / "sfx" / "speech.ogg")

def test_load_all(mock_db_path):
    write_json(mock_db_path / "database" / "characters" / "ann.json", {
        "id": "ann-lee",
        "firstname": "Ann",
        "lastname": "Lee",
        "portraits": {"sad": "ann/sad.png"},
    })
    write_json(mock_db_path / "database" / "sounds" / "blips.json", [
        {"id": "blip", "file": "sfx/blip.wav"},
        {"id": "abs", "file": str(mock_db_path / "abs.wav")},
    ])

    db = AssetDatabase(mock_db_path)
    db.load_all()

    ann = db.characters["ann-lee"]
    assert ann.fullname == "Ann Lee"
    assert ann.get_portrait("sad") == "ann/sad.png"
    assert db.get_sound("blip") == str(mock_db_path / "sfx" / "blip.wav")
    assert db.get_sound("abs") == str(mock_db_path / "abs.wav")
    assert db.get_sound("missing") is None

def test_validation_error(mock_db_path):
    # Pitch out of range
    write_json(mock_db_path / "database" / "characters" / "broken.json", [
        {"id": "broken", "firstname": "Broke", "voice_pitch": 9.0},
        {"id": "fine", "firstname": "Fine"},
    ])

    db = AssetDatabase(mock_db_path)
    db.load_all()

    assert "broken" not in db.characters # Should be skipped due to validation error
    assert "fine" in db.characters

def test_invalid_json_skipped(mock_db_path, caplog):
    (mock_db_path / "database" / "sounds" / "bad.json").write_text("{not json")

    db = AssetDatabase(mock_db_path)
    db.load_all()

    assert db.sounds == {}
    assert "Failed to load" in caplog.text

def test_missing_schema(mock_db_path):
    write_json(mock_db_path / "database" / "sounds" / "blip.json", {"id": "blip", "file": "blip.wav"})
    (mock_db_path / "schemas" / "sound.schema.json").unlink()

    db = AssetDatabase(mock_db_path)
    db.load_all()

    assert db.sounds == {}

def test_missing_player_warns(mock_db_path, caplog):
    db = AssetDatabase(mock_db_path)
    db.load_all()

    assert db.player is None
    assert "No player character" in caplog.text

def test_custom_player_id(tmp_path):
    db = AssetDatabase(tmp_path, player_id="hero")
    hero = db.add_character("hero", Character(firstname="Hero"))

    assert db.player is hero

def test_find_character(assets):
    bob = assets.get_character("bob-stone")

    assert assets.find_character("Bob Stone") is bob
    assert assets.find_character("bob") is bob
    assert assets.find_character("ROCKY") is bob
    assert assets.find_character("bob-stone") is bob
    assert assets.find_character("Nobody") is None
    assert assets.find_character("  ") is None
