from ledboard.__main__ import build_parser, main
from ledboard.processing.buffer import PixelBuffer
from ledboard.processing.codec import decode, encode


def test_parser_defaults_to_serve():
    args = build_parser().parse_args([])

    assert args.func.__name__ == "cmd_serve"


def test_process_command_writes_output(tmp_path):
    source = tmp_path / "in.png"
    source.write_bytes(encode(PixelBuffer.new(30, 30, 0x000000FF), "png"))
    output = tmp_path / "out.png"

    code = main(["process", str(source), str(output), "--invert", "--cell-size", "10"])

    assert code == 0
    result = decode(output.read_bytes())
    assert result.size == (30, 30)
    assert result.get_pixel(5, 5) == (255, 255, 255, 255)


def test_text_command_writes_output(tmp_path):
    output = tmp_path / "text.png"

    code = main(["text", "Hi", str(output), "--font-size", "16", "--background", "#102030"])

    assert code == 0
    assert decode(output.read_bytes()).get_pixel(0, 0) == (0x10, 0x20, 0x30, 255)


def test_errors_return_nonzero(tmp_path, capsys):
    source = tmp_path / "in.png"
    source.write_bytes(encode(PixelBuffer.new(4, 4), "png"))

    code = main(["process", str(source), str(tmp_path / "out.png"), "--cell-size", "10"])

    assert code == 1
    assert "Image is smaller than one LED cell" in capsys.readouterr().err


def test_missing_input_file_returns_nonzero(tmp_path, capsys):
    code = main(["process", str(tmp_path / "nope.png"), str(tmp_path / "out.png")])

    assert code == 1
    assert "No such file" in capsys.readouterr().err
    assert not (tmp_path / "out.png").exists()
