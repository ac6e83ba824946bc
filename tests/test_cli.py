from chip8vm import FlagOrder, ShiftMode
from chip8vm.cli import build_parser, config_from_args, main

from conftest import assemble


def test_defaults():
    config = config_from_args(build_parser().parse_args(["game.ch8"]))
    assert config.cpu_hz == 600
    assert config.timer_hz == 60
    assert config.stack_depth == 16
    assert config.shift_mode is ShiftMode.IN_PLACE
    assert config.flag_order is FlagOrder.FLAG_LAST
    assert not config.increment_index


def test_quirk_flags():
    args = build_parser().parse_args(
        ["game.ch8", "--hz", "1000", "--stack-depth", "12",
         "--shift-from-vy", "--value-last", "--increment-index"])
    config = config_from_args(args)
    assert config.cpu_hz == 1000
    assert config.stack_depth == 12
    assert config.shift_mode is ShiftMode.FROM_VY
    assert config.flag_order is FlagOrder.VALUE_LAST
    assert config.increment_index


def test_headless_run(tmp_path, capsys):
    rom = tmp_path / "draw.ch8"
    # draw digit 0 at (0, 0), then spin
    rom.write_bytes(assemble(0xA000, 0xD005, 0x1204))
    assert main([str(rom), "--headless", "0.1"]) == 0
    out = capsys.readouterr().out
    assert "pc = 0x204" in out
    assert "####" in out


def test_headless_reports_halt(tmp_path, capsys):
    rom = tmp_path / "bad.ch8"
    rom.write_bytes(assemble(0x00EE))
    assert main([str(rom), "--headless", "1"]) == 1
    assert "RET with empty stack" in capsys.readouterr().err


def test_missing_rom(tmp_path, capsys):
    assert main([str(tmp_path / "nope.ch8"), "--headless", "1"]) == 1
    assert "ROM not found" in capsys.readouterr().err


def test_rom_too_large(tmp_path, capsys):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(4000))
    assert main([str(rom), "--headless", "1"]) == 1
    assert "only 3584 fit" in capsys.readouterr().err


def test_bad_stack_depth(tmp_path, capsys):
    assert main([str(tmp_path / "x.ch8"), "--stack-depth", "0"]) == 2
