from unittest import mock

import pygame
import pytest

from ecotetris.app import main, map_key
from ecotetris.controller import Key


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def _keydown(key, char):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=char)


@pytest.mark.parametrize(
    "key, expected",
    [
        (pygame.K_UP, Key.UP),
        (pygame.K_DOWN, Key.DOWN),
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_RIGHT, Key.RIGHT),
    ],
)
def test_arrows_map_to_keys(key, expected):
    assert map_key(key, "") is expected


@pytest.mark.parametrize(
    "key, char, expected",
    [
        (pygame.K_RETURN, "", "\r"),
        (pygame.K_KP_ENTER, "", "\r"),
        (pygame.K_ESCAPE, "", "\x1b"),
        (pygame.K_SPACE, "", " "),
    ],
)
def test_special_characters(key, char, expected):
    assert map_key(key, char) == expected


def test_ordinary_character_passes_through():
    assert map_key(pygame.K_c, "C") == "C"
    assert map_key(pygame.K_q, "q") == "q"


def test_key_without_text_is_ignored():
    assert map_key(pygame.K_LSHIFT, "") is None


def test_quit_event_ends_main(headless, capsys):
    with mock.patch(
        "pygame.event.get", return_value=[pygame.event.Event(pygame.QUIT)]
    ) as get:
        assert main([]) == 0
    assert get.call_count == 1
    assert "Bem-vindo ao EcoTetris!" in capsys.readouterr().out


def test_escape_in_menu_quits(headless, tmp_path):
    with mock.patch(
        "pygame.event.get",
        side_effect=[[_keydown(pygame.K_ESCAPE, "\x1b")]],
    ) as get:
        assert main(["--textures", str(tmp_path), "--seed", "1"]) == 0
    assert get.call_count == 1


def test_play_then_back_to_menu_then_quit(headless, tmp_path):
    frames = [
        [_keydown(pygame.K_RETURN, "\r")],
        [_keydown(pygame.K_LEFT, "")],
        [_keydown(pygame.K_q, "q")],
        [_keydown(pygame.K_ESCAPE, "\x1b")],
    ]
    with mock.patch("pygame.event.get", side_effect=frames) as get:
        assert main(["--textures", str(tmp_path), "--seed", "3"]) == 0
    assert get.call_count == len(frames)


def test_bad_seed_is_rejected():
    with pytest.raises(SystemExit) as info:
        main(["--seed", "abc"])
    assert info.value.code == 2