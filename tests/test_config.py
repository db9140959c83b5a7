from pathlib import Path

import pytest

from railmap.core.config import EditorConfig, get_paths, load_config


def test_missing_config_gives_defaults(tmp_path):
    assert load_config(None) == EditorConfig()
    assert load_config(tmp_path / "absent.yaml") == EditorConfig()


def test_load_config(tmp_path):
    path = tmp_path / "editor.yaml"
    path.write_text(
        "grid_size: 25\ngrid_snap: false\nstorage_path: saved/state.json\n", encoding="utf-8"
    )
    cfg = load_config(path)
    assert cfg.grid_size == 25
    assert cfg.grid_snap is False
    assert cfg.storage_path == Path("saved/state.json")
    assert get_paths(tmp_path, cfg).storage_file == Path("saved/state.json")


@pytest.mark.parametrize("text", ["colour: blue\n", "grid_size: 0\n", "- a\n- b\n"])
def test_bad_config_raises(tmp_path, text):
    path = tmp_path / "editor.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_default_paths(tmp_path):
    paths = get_paths(tmp_path)
    assert paths.storage_file == tmp_path.resolve() / "data" / "railmap_storage.json"
    assert paths.exports == tmp_path.resolve() / "exports"
