import json
import pytest
from story.config import PrinterConfig, load_config, save_config
from story.policy import PrintBehaviour

def test_defaults():
    config = PrinterConfig()

    assert config.character_print_speed == 0.040
    assert config.speech_default_pitch == 0.5
    assert config.default_delay_after_print == 2.0
    assert config.default_print_behaviour is PrintBehaviour.AWAIT
    assert config.confirm_completes_after_skip

def test_negative_speed_rejected():
    with pytest.raises(ValueError):
        PrinterConfig(character_print_speed=-0.1)

def test_load_config(tmp_path):
    path = tmp_path / "printer.json"
    path.write_text(json.dumps({
        "character_print_speed": 0.02,
        "default_print_behaviour": "Delay",
        "default_delay_after_print": 1.25,
        "confirm_completes_after_skip": False,
    }))

    config = load_config(path)

    assert config.character_print_speed == 0.02
    assert config.default_print_behaviour is PrintBehaviour.DELAY
    assert config.default_delay_after_print == 1.25
    assert not config.confirm_completes_after_skip
    assert config.speech_sound == "default-speech"

def test_missing_file_gives_defaults(tmp_path, caplog):
    config = load_config(tmp_path / "nope.json")

    assert config == PrinterConfig()
    assert "not found" in caplog.text

def test_invalid_json_gives_defaults(tmp_path, caplog):
    path = tmp_path / "printer.json"
    path.write_text("{oops")

    assert load_config(path) == PrinterConfig()
    assert "Error loading printer config" in caplog.text

def test_unknown_entries_ignored(tmp_path, caplog):
    path = tmp_path / "printer.json"
    path.write_text(json.dumps({"font": "serif", "default_print_behaviour": "never"}))

    config = load_config(path)

    assert not hasattr(config, "font")
    assert config.default_print_behaviour is PrintBehaviour.AWAIT
    assert "font" in caplog.text
    assert "never" in caplog.text

def test_negative_speed_in_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "printer.json"
    path.write_text(json.dumps({"character_print_speed": -1, "speech_default_pitch": 0.9}))

    assert load_config(path) == PrinterConfig()
    assert "Invalid printer config" in caplog.text

def test_wrongly_typed_values_ignored(tmp_path, caplog):
    path = tmp_path / "printer.json"
    path.write_text(json.dumps({
        "character_print_speed": "fast",
        "confirm_completes_after_skip": "no",
        "speech_sound": 3,
        "default_delay_after_print": True,
        "default_print_behaviour": True,
        "speech_default_pitch": 1,
    }))

    config = load_config(path)

    assert config.character_print_speed == 0.040
    assert config.confirm_completes_after_skip is True
    assert config.speech_sound == "default-speech"
    assert config.default_delay_after_print == 2.0
    assert config.default_print_behaviour is PrintBehaviour.AWAIT
    assert config.speech_default_pitch == 1.0
    assert isinstance(config.speech_default_pitch, float)
    assert "fast" in caplog.text

def test_non_object_file_gives_defaults(tmp_path):
    path = tmp_path / "printer.json"
    path.write_text("[1, 2]")

    assert load_config(path) == PrinterConfig()

def test_save_then_load(tmp_path):
    path = tmp_path / "printer.json"
    config = PrinterConfig(speech_default_pitch=0.7, default_print_behaviour=PrintBehaviour.IMMEDIATE)

    save_config(config, path)

    assert json.loads(path.read_text())["default_print_behaviour"] == "immediate"
    assert load_config(path) == config
