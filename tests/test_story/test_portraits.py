import pytest
from story.character import Character
from story.participant import Participant
from story.portraits import AnimatedPortrait, PortraitRegistry, Shadow, SHADOW_HIDDEN, SHADOW_SHOWN

@pytest.fixture
def participants():
    return [
        Participant(Character(firstname="Alex", default_portrait="alex.png")),
        Participant(Character(
            firstname="Bob",
            default_portrait="bob.png",
            portraits={"happy": "bob_happy.png"},
        )),
    ]

@pytest.fixture
def registry():
    return PortraitRegistry()

def test_register_and_unregister(registry):
    portrait = registry.register(AnimatedPortrait(0))
    registry.register(portrait)

    assert len(registry) == 1
    assert registry.portraits == [portrait]

    registry.unregister(portrait)
    registry.unregister(portrait)
    assert len(registry) == 0

def test_clear(registry):
    registry.register(AnimatedPortrait(0))
    registry.register(AnimatedPortrait(1))

    registry.clear()

    assert registry.portraits == []

def test_speaker_shows_emotion(registry, participants):
    bob = registry.register(AnimatedPortrait(1, shadow=Shadow()))
    participants[1].emotion = "happy"

    registry.update_portraits(participants, participants[1])

    assert bob.texture == "bob_happy.png"
    assert bob.shadow.alpha == SHADOW_HIDDEN

def test_missing_emotion_falls_back_to_default(registry, participants):
    bob = registry.register(AnimatedPortrait(1, texture="bob_happy.png"))
    participants[1].emotion = "sad"

    registry.update_portraits(participants, participants[1])

    assert bob.texture == "bob.png"

def test_listeners_are_shadowed(registry, participants):
    alex = registry.register(AnimatedPortrait(0, shadow=Shadow(alpha=0.0)))

    registry.update_portraits(participants, participants[1])

    assert alex.shadow.alpha == SHADOW_SHOWN
    # Unassigned textures get the default portrait
    assert alex.texture == "alex.png"

def test_listener_texture_kept(registry, participants):
    alex = registry.register(AnimatedPortrait(0, texture="alex_angry.png"))

    registry.update_portraits(participants, participants[1])

    assert alex.texture == "alex_angry.png"

def test_no_speaker_shadows_everyone(registry, participants):
    portraits = [registry.register(AnimatedPortrait(i, shadow=Shadow(0.0))) for i in range(2)]

    registry.update_portraits(participants, None)

    assert [p.shadow.alpha for p in portraits] == [SHADOW_SHOWN, SHADOW_SHOWN]

def test_out_of_range_elements_skipped(registry, participants):
    stray = registry.register(AnimatedPortrait(5, shadow=Shadow(0.5)))
    negative = registry.register(AnimatedPortrait(-1))

    registry.update_portraits(participants, participants[0])

    assert stray.texture is None
    assert stray.shadow.alpha == 0.5
    assert negative.texture is None

def test_same_character_twice_compared_by_participant(registry):
    character = Character(firstname="Twin", default_portrait="twin.png")
    participants = [Participant(character), Participant(character)]
    first = registry.register(AnimatedPortrait(0, shadow=Shadow()))
    second = registry.register(AnimatedPortrait(1, shadow=Shadow()))

    registry.update_portraits(participants, participants[1])

    assert first.shadow.alpha == SHADOW_SHOWN
    assert second.shadow.alpha == SHADOW_HIDDEN
