import json
import subprocess
import sys
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]


def _run(script, *args):
    return subprocess.run(
        [sys.executable, str(ROOT / "scripts" / script), *args],
        cwd=ROOT,
        capture_output=True,
        text=True,
        timeout=120,
    )


def _write_image(path, width=7, height=2):
    data = np.zeros((height, width, 4), dtype=np.uint8)
    data[..., 0] = np.arange(width, dtype=np.uint8)[None, :] * 30
    data[..., 3] = 255
    Image.fromarray(data).save(path)
    return data


def test_run_pattern_custom(tmp_path):
    image = tmp_path / "cloth.png"
    data = _write_image(image)
    result = _run("run_pattern.py", "--image", str(image), "--pattern", "3,1,2")
    assert result.returncode == 0, result.stderr

    output = tmp_path / "cloth_processed.png"
    with Image.open(output) as img:
        out = np.array(img.convert("RGBA"))
    assert out[0, :, 0].tolist() == [60, 0, 30, 150, 90, 120, 180]
    assert np.array_equal(out[:, 6], data[:, 6])

    metrics = json.loads((tmp_path / "run.json").read_text())
    assert metrics["status"] == "SUCCESS"
    assert metrics["slices"] == 2
    assert metrics["pattern"] == [3, 1, 2]
    assert (tmp_path / "cloth_processed_config.yaml").exists()


def test_run_pattern_invalid_pattern(tmp_path):
    image = tmp_path / "cloth.png"
    _write_image(image)
    result = _run("run_pattern.py", "--image", str(image), "--pattern", "1,1,2")
    assert result.returncode == 1
    metrics = json.loads((tmp_path / "run.json").read_text())
    assert metrics["status"] == "FAILED"
    assert "repeats" in metrics["error"]


def test_manage_then_run_from_catalog(tmp_path):
    catalog = tmp_path / "patterns.json"
    created = _run("manage_patterns.py", "--catalog", str(catalog), "create", "--name", "Mirror", "--pattern", "2,1")
    assert created.returncode == 0, created.stderr
    pattern_id = json.loads(catalog.read_text())[0]["id"]

    listed = _run("manage_patterns.py", "--catalog", str(catalog), "list")
    assert "Mirror" in listed.stdout

    image = tmp_path / "swatch.png"
    _write_image(image, width=4, height=1)
    output = tmp_path / "out" / "swatch.bmp"
    result = _run(
        "run_pattern.py", "--image", str(image), "--catalog", str(catalog), "--pattern_id", pattern_id,
        "--format", "bmp", "--output", str(output),
    )
    assert result.returncode == 0, result.stderr
    with Image.open(output) as img:
        assert img.format == "BMP"
        out = np.array(img.convert("RGBA"))
    assert out[0, :, 0].tolist() == [30, 0, 90, 60]

    deleted = _run("manage_patterns.py", "--catalog", str(catalog), "delete", pattern_id)
    assert deleted.returncode == 0
    assert json.loads(catalog.read_text()) == []
    missing = _run("manage_patterns.py", "--catalog", str(catalog), "delete", pattern_id)
    assert missing.returncode == 1


def test_manage_rejects_invalid(tmp_path):
    catalog = tmp_path / "patterns.json"
    result = _run("manage_patterns.py", "--catalog", str(catalog), "create", "--name", "bad", "--pattern", "1,5,2")
    assert result.returncode == 1
    assert "Invalid pattern" in result.stderr
    assert not catalog.exists()


def test_presets_listing():
    result = _run("manage_patterns.py", "presets", "--size", "4")
    assert result.returncode == 0
    line = next(l for l in result.stdout.splitlines() if l.startswith("reverse"))
    assert line.split()[1] == "4,3,2,1"


def test_run_pattern_keeps_input_config(tmp_path):
    image = tmp_path / "cloth.png"
    _write_image(image)
    config = tmp_path / "config.yaml"
    original = "# shared settings\ndefault_size: 3\noutput_suffix: _woven\n"
    config.write_text(original)
    result = _run("run_pattern.py", "--image", str(image), "--config", str(config), "--preset", "reverse")
    assert result.returncode == 0, result.stderr
    assert config.read_text() == original
    assert (tmp_path / "cloth_woven.png").exists()
    assert (tmp_path / "cloth_woven_config.yaml").exists()


def test_presets_rejects_zero_size():
    result = _run("manage_patterns.py", "presets", "--size", "0")
    assert result.returncode == 1
    assert "positive integer" in result.stderr
    assert "identity" not in result.stdout
