from __future__ import annotations

import json
from pathlib import Path

from pypixbuf.buffer import PixelBuffer
from pypixbuf.serialization.binary import load_buffer, save_buffer


def test_cli_new_then_info_json(tmp_path: Path, capsys) -> None:
    from pypixbuf.cli import main

    out_path = tmp_path / "a.imgbin"
    code = main(
        ["new", "--out", str(out_path), "--width", "4", "--height", "3", "--channels", "3", "--model", "RGB", "--fill", "10"]
    )
    assert code == 0
    assert "PixelBuffer(4x3x3, RGB)" in capsys.readouterr().out
    assert load_buffer(out_path) == PixelBuffer.filled(4, 3, 3, "RGB", 10)

    code = main(["info", str(out_path), "--json"])
    assert code == 0
    parsed = json.loads(capsys.readouterr().out)
    assert parsed["width"] == 4
    assert parsed["model"] == "RGB"
    assert parsed["payload_size"] == 36
    assert parsed["path"] == str(out_path)


def test_cli_new_flags_override_config(tmp_path: Path) -> None:
    from pypixbuf.cli import main

    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"width": 2, "height": 2, "channels": 1, "model": "GRAY", "fill": 5}), encoding="utf-8")
    out_path = tmp_path / "b.imgbin"
    assert main(["new", "--config", str(cfg), "--fill", "9", "--out", str(out_path)]) == 0
    assert load_buffer(out_path) == PixelBuffer.filled(2, 2, 1, "GRAY", 9)


def test_cli_threshold_and_invert(tmp_path: Path, capsys) -> None:
    from pypixbuf.cli import main

    src = tmp_path / "src.imgbin"
    save_buffer(src, PixelBuffer.from_bytes(2, 1, 1, "GRAY", [10, 200]))

    mask_path = tmp_path / "mask.imgbin"
    assert main(["threshold", str(src), "--op", ">", "--value", "100", "--out", str(mask_path)]) == 0
    mask = load_buffer(mask_path)
    assert mask.model == "BINARY"
    assert mask.data == bytes([0, 255])

    inv_path = tmp_path / "inv.imgbin"
    assert main(["invert", str(src), "--out", str(inv_path)]) == 0
    assert load_buffer(inv_path).data == bytes([245, 55])
    capsys.readouterr()


def test_cli_reports_errors_on_stderr(tmp_path: Path, capsys) -> None:
    from pypixbuf.cli import main

    code = main(["info", str(tmp_path / "missing.imgbin")])
    assert code == 2
    err = capsys.readouterr().err
    assert err.startswith("error:")

    code = main(["new", "--out", str(tmp_path / "x.imgbin"), "--width", "-1"])
    assert code == 2
