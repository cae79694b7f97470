import sys

import numpy as np
import pytest
from PIL import Image

import grow
import verify
from params import ConfigurationError, Params
from render import save_image


def test_make_image_holds_every_color_once():
    pixels, stats = grow.make_image(Params(scale=2, num_seeds=3))

    assert pixels.shape == (8, 8, 3)
    assert len(np.unique(pixels.reshape(-1, 3), axis=0)) == 64
    assert stats.seeded == 3
    assert stats.seeded + stats.grown + stats.fallbacks == 64


def test_make_image_rejects_bad_params():
    with pytest.raises(ConfigurationError):
        grow.make_image(Params(scale=2, num_seeds=0))


def test_same_seed_gives_identical_images(tmp_path):
    params = Params(scale=3, num_seeds=4, initial_turn_rate=0.3, alpha=0.5, cycle_cap=2, seed=123)

    for name in ("a.png", "b.png"):
        pixels, _ = grow.make_image(params)
        save_image(pixels, tmp_path / name)

    assert (tmp_path / "a.png").read_bytes() == (tmp_path / "b.png").read_bytes()


def test_different_seeds_give_different_images():
    pixels_a, _ = grow.make_image(Params(scale=3, num_seeds=4, seed=1))
    pixels_b, _ = grow.make_image(Params(scale=3, num_seeds=4, seed=2))

    assert not np.array_equal(pixels_a, pixels_b)


def test_verify_accepts_a_generated_image(tmp_path):
    path = tmp_path / "img.png"
    pixels, _ = grow.make_image(Params(scale=3, num_seeds=10))
    save_image(pixels, path)

    verify.verify(path, 3)


def test_verify_rejects_a_duplicated_color(tmp_path):
    path = tmp_path / "img.png"
    pixels, _ = grow.make_image(Params(scale=2, num_seeds=10))
    pixels[0, 0] = pixels[0, 1]
    save_image(pixels, path)

    with pytest.raises(AssertionError):
        verify.verify(path, 2)


def test_verify_rejects_the_wrong_scale(tmp_path):
    path = tmp_path / "img.png"
    pixels, _ = grow.make_image(Params(scale=2, num_seeds=10))
    save_image(pixels, path)

    with pytest.raises(AssertionError):
        verify.verify(path, 3)


def test_main_saves_the_image(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["grow.py", str(tmp_path / "out"), "-sc", "2", "-n", "5", "-s", "9"]
    )

    grow.main()

    path = tmp_path / "out" / "img-2-5-0.01-0.2-10-9.png"
    assert path.exists()
    assert Image.open(path).size == (8, 8)
    assert "Start img-2-5-0.01-0.2-10-9.png" in capsys.readouterr().out

    verify.verify(path, 2)


def test_main_rejects_bad_params(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["grow.py", str(tmp_path), "-sc", "2", "-n", "0"])

    with pytest.raises(SystemExit):
        grow.main()

    assert not list(tmp_path.iterdir())


def test_make_image_rejects_overflowing_turns_before_placing():
    with pytest.raises(ConfigurationError):
        grow.make_image(Params(scale=2, num_seeds=1, alpha=-200.0))
    with pytest.raises(ConfigurationError):
        grow.make_image(Params(scale=2, num_seeds=1, initial_turn_rate=1e308))
