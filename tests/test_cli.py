import numpy as np
from PIL import Image

import pencel


def _write_image(path):
    img = np.zeros((8, 8, 3), dtype=np.uint8)
    img[:, 4:] = 255
    Image.fromarray(img).save(path)


def test_cli_prints_grid_and_writes_png(tmp_path, capsys):
    src = tmp_path / "in.png"
    out = tmp_path / "out.png"
    _write_image(src)
    status = pencel.main(
        [str(src), "--width", "4", "--height", "2", "--no-colour", "--workers", "1",
         "--output", str(out), "--cell", "2", "--usage"]
    )
    assert status == 0
    stdout = capsys.readouterr().out
    grid_rows = [line for line in stdout.splitlines() if len(line) == 8 and set(line) <= set("HL")]
    assert len(grid_rows) == 2
    assert "Tones used:" in stdout
    with Image.open(out) as im:
        assert im.size == (8, 4)


def test_cli_palette_file(tmp_path, capsys):
    src = tmp_path / "in.png"
    _write_image(src)
    pal = tmp_path / "pal.txt"
    pal.write_text("Ink 000000 000000\nPaper ffffff ffffff\n", encoding="utf-8")
    status = pencel.main([str(src), "--palette", str(pal), "--width", "2", "--height", "1",
                          "--no-colour", "--usage"])
    assert status == 0
    stdout = capsys.readouterr().out
    assert "Ink (heavy): 1" in stdout
    assert "Paper (heavy): 1" in stdout


def test_cli_missing_input(tmp_path, capsys):
    assert pencel.main([str(tmp_path / "missing.png")]) == 2
    assert "not found" in capsys.readouterr().err


def test_cli_unsupported_kernel(tmp_path, capsys):
    src = tmp_path / "in.png"
    _write_image(src)
    assert pencel.main([str(src), "--kernel", "lanczos3"]) == 2
    assert "not implemented" in capsys.readouterr().err


def test_cli_bad_palette(tmp_path, capsys):
    src = tmp_path / "in.png"
    _write_image(src)
    pal = tmp_path / "pal.txt"
    pal.write_text("Ink 00000g 000000\n", encoding="utf-8")
    assert pencel.main([str(src), "--palette", str(pal)]) == 2
    assert "line 1" in capsys.readouterr().err


def test_cli_folder_mode(tmp_path, capsys):
    _write_image(tmp_path / "a.png")
    _write_image(tmp_path / "b.png")
    outdir = tmp_path / "out"
    status = pencel.main([str(tmp_path), "--outdir", str(outdir), "--width", "2",
                          "--height", "2", "--no-colour", "--jobs", "2"])
    assert status == 0
    stdout = capsys.readouterr().out
    assert stdout.index("=== a.png ===") < stdout.index("=== b.png ===")
    assert sorted(p.name for p in outdir.iterdir()) == ["a_pencel.png", "b_pencel.png"]


def test_cli_undecodable_palette_file(tmp_path, capsys):
    src = tmp_path / "in.png"
    _write_image(src)
    pal = tmp_path / "pal.txt"
    pal.write_bytes(b"Ink \xff\xfe 000000\n")
    assert pencel.main([str(src), "--palette", str(pal), "--no-colour"]) == 2
    assert "cannot read palette" in capsys.readouterr().err


def test_cli_output_into_missing_directory(tmp_path, capsys):
    src = tmp_path / "in.png"
    _write_image(src)
    out = tmp_path / "nodir" / "o.png"
    status = pencel.main([str(src), "--output", str(out), "--no-colour",
                          "--width", "2", "--height", "2"])
    assert status == 2
    assert "cannot write" in capsys.readouterr().err
    assert not out.exists()
