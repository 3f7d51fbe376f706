import io
import json
import os

import pytest

from ebsattach.core.errors import OutputWriteError, StateParseError, StateStructureError
from ebsattach.core.runtime import dump_state, parse_state, read_state, write_state, write_text
from ebsattach.core.runtime.storage import read_text


def test_read_state_returns_document_and_original_text(state_file):
    document, text = read_state(str(state_file))

    assert text == state_file.read_text(encoding="utf-8")
    assert len(document.modules) == 1
    assert "aws_instance.mysrv" in document.modules[0].resources


def test_read_state_from_stdin(monkeypatch, state_data):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(state_data)))

    document, _ = read_state("-")

    assert document.modules[0].resources["aws_instance.mysrv"].primary.id == "i-11111111"


def test_read_missing_file(tmp_path):
    with pytest.raises(StateParseError) as exc:
        read_text(str(tmp_path / "nope.tfstate"))
    assert "nope.tfstate" in str(exc.value)


def test_parse_invalid_json():
    with pytest.raises(StateParseError):
        parse_state("{not json", "broken.tfstate")


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"version": 3},
        {"modules": [{"path": ["root"]}]},
        {"modules": [{"resources": {"aws_instance.a": {"primary": {"attributes": {"x": ["no"]}}}}}]},
    ],
)
def test_parse_missing_structure(payload):
    with pytest.raises(StateStructureError):
        parse_state(json.dumps(payload))


def test_dump_preserves_unknown_fields_and_absent_defaults():
    data = {
        "version": 3,
        "backend": {"type": "s3"},
        "modules": [
            {
                "path": ["root"],
                "resources": {
                    "aws_instance.a": {"type": "aws_instance", "primary": {"id": "i-1", "schema_version": "1"}},
                },
            }
        ],
    }

    dumped = json.loads(dump_state(parse_state(json.dumps(data))))

    assert dumped == data


def test_dump_is_indented_with_trailing_newline(state_data):
    text = dump_state(parse_state(json.dumps(state_data)), indent=4)

    assert text.endswith("}\n")
    assert '\n    "modules": [' in text


def test_write_state_replaces_file_and_keeps_mode(state_file, state_data):
    os.chmod(state_file, 0o640)
    document = parse_state(json.dumps(state_data))

    write_state(str(state_file), document)

    assert json.loads(state_file.read_text(encoding="utf-8")) == json.loads(dump_state(document))
    assert (state_file.stat().st_mode & 0o777) == 0o640
    assert [p.name for p in state_file.parent.iterdir()] == [state_file.name]


def test_write_new_file_default_mode(tmp_path):
    target = tmp_path / "out.tfstate"
    write_text(str(target), "{}\n")

    assert target.read_text() == "{}\n"
    assert (target.stat().st_mode & 0o777) == 0o644


def test_write_to_missing_directory(tmp_path):
    with pytest.raises(OutputWriteError) as exc:
        write_text(str(tmp_path / "missing" / "out.tfstate"), "{}\n")
    assert "out.tfstate" in str(exc.value)


def test_write_to_stdout(capsys):
    write_text("-", '{"modules": []}\n')
    assert capsys.readouterr().out == '{"modules": []}\n'


def test_read_invalid_utf8_file(tmp_path):
    path = tmp_path / "latin1.tfstate"
    path.write_bytes(b'{"modules": [], "lineage": "\xff"}')

    with pytest.raises(StateParseError) as exc:
        read_text(str(path))
    assert "UTF-8" in str(exc.value)


def _state_with_lone_surrogate(state_data):
    attrs = state_data["modules"][0]["resources"]["aws_instance.mysrv"]["primary"]["attributes"]
    attrs["instance_type"] = "t2\ud800"
    return parse_state(json.dumps(state_data))


def test_write_unencodable_state_leaves_no_temp_file(tmp_path, state_data):
    document = _state_with_lone_surrogate(state_data)
    target = tmp_path / "out.tfstate"

    with pytest.raises(OutputWriteError):
        write_state(str(target), document)

    assert list(tmp_path.iterdir()) == []


def test_write_unencodable_state_keeps_existing_file(state_file, state_data):
    original = state_file.read_bytes()
    document = _state_with_lone_surrogate(state_data)

    with pytest.raises(OutputWriteError):
        write_state(str(state_file), document)

    assert state_file.read_bytes() == original
    assert [p.name for p in state_file.parent.iterdir()] == [state_file.name]


def test_write_unencodable_text_to_stdout(capsys):
    with pytest.raises(OutputWriteError) as exc:
        write_text("-", '{"x": "\ud800"}\n')

    assert "<stdout>" in str(exc.value)
    assert capsys.readouterr().out == ""


def test_write_through_symlink(tmp_path):
    real = tmp_path / "states" / "real.tfstate"
    real.parent.mkdir()
    real.write_text("{}\n")
    link = tmp_path / "terraform.tfstate"
    link.symlink_to(real)

    write_text(str(link), '{"modules": []}\n')

    assert link.is_symlink()
    assert real.read_text() == '{"modules": []}\n'
    assert sorted(p.name for p in real.parent.iterdir()) == ["real.tfstate"]
