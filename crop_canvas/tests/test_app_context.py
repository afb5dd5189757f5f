from __future__ import annotations

from pathlib import Path

from PIL import Image

from crop_canvas import app_context
from crop_canvas.app_context import AppContext, initialize_app, resolve_suppress_orientation
from crop_canvas import render_image
from crop_canvas.render_image import main
from crop_canvas.services.image_loader import load_image


def test_initialize_app_honors_env_config_dir(monkeypatch, tmp_path: Path) -> None:
    config_dir = tmp_path / "cfg"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(
        '[render]\nfill_color = "#000000"\n\n[constraints]\nmax_width = 640\n', encoding="utf-8"
    )
    monkeypatch.setenv(app_context.ENV_CONFIG_DIR, str(config_dir))

    context: AppContext = initialize_app()

    assert context.config_path == config_dir / "config.toml"
    assert context.render_options.fill_color == "#000000"
    assert context.constraints.max_width == 640
    assert context.constraints.max_height is None
    assert context.suppress_embedded_orientation is False
    assert context.jpeg_quality == 92
    assert (config_dir / "logs" / "crop_canvas.log").exists()


def test_user_agent_forces_orientation_suppression() -> None:
    config = {"orientation": {"suppress_embedded": False, "user_agent": "iPad; AppleWebKit/605.1"}}
    assert resolve_suppress_orientation(config) is True
    assert resolve_suppress_orientation({"orientation": {"user_agent": "Firefox"}}) is False


def test_cli_renders_oriented_jpeg(tmp_path: Path, jpeg_bytes) -> None:
    source = tmp_path / "in.jpg"
    target = tmp_path / "out.jpg"
    source.write_bytes(jpeg_bytes((30, 10), orientation=6))

    code = main(
        [str(source), str(target), "--config", str(tmp_path / "config.toml"), "--max-height", "15"]
    )

    assert code == 0
    with Image.open(target) as rendered:
        assert rendered.format == "JPEG"
        assert rendered.size == (5, 15)


def test_cli_reports_unreadable_input(tmp_path: Path) -> None:
    code = main([str(tmp_path / "missing.jpg"), str(tmp_path / "out.jpg"), "--config", str(tmp_path / "c.toml")])
    assert code == 1


def test_cli_threads_configured_orientation_suppression(monkeypatch, tmp_path: Path, jpeg_bytes) -> None:
    source = tmp_path / "in.jpg"
    target = tmp_path / "out.jpg"
    config_path = tmp_path / "config.toml"
    source.write_bytes(jpeg_bytes((30, 10), orientation=6))
    config_path.write_text("[orientation]\nsuppress_embedded = true\n", encoding="utf-8")

    calls: list[dict] = []

    def recording_load_image(data, **kwargs):
        calls.append(kwargs)
        return load_image(data, **kwargs)

    monkeypatch.setattr(render_image, "load_image", recording_load_image)

    code = main([str(source), str(target), "--config", str(config_path), "--max-height", "15"])

    assert code == 0
    assert calls and calls[0]["suppress_embedded_orientation"] is True
    with Image.open(target) as rendered:
        # rotated once from the EXIF value, not again by the decoder
        assert rendered.size == (5, 15)
