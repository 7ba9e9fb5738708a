import pytest

from ukicore.config import Config
from ukicore.errors import ConfigError, NotFound


def _yaml(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text)
    return str(p)

def test_missing_key_is_empty_list():
    assert Config().get_list("cmdline") == []
    assert Config().get("cmdline") is None

def test_layer_priority(tmp_path):
    base = _yaml(tmp_path, "base.yaml", "cmdline: [from-base]\nname: base\n")
    over = _yaml(tmp_path, "over.yaml", "cmdline: [from-over]\n")
    cfg = Config.from_sources([base, over], env={}, defaults={"name": "default", "level": "info"})
    assert cfg.get_list("cmdline") == ["from-over"]
    assert cfg.get("name") == "base"
    assert cfg.get("level") == "info"
    cfg.set("name", "explicit")
    assert cfg.get("name") == "explicit"

def test_env_overrides_files(tmp_path):
    base = _yaml(tmp_path, "base.yaml", "cmdline: [from-file]\n")
    env = {"UKI_CMDLINE": "a=1 b\nc=2\n"}
    cfg = Config.from_sources([base], env=env)
    assert cfg.get_list("cmdline") == ["a=1 b", "c=2"]
    cfg.set("cmdline", ["explicit"])
    assert cfg.get_list("cmdline") == ["explicit"]

def test_nested_keys_and_env_names(tmp_path):
    f = _yaml(tmp_path, "c.yaml", "Squashfs:\n  Options: ['-comp', 'xz']\n")
    cfg = Config.from_sources([f], env={"UKI_SQUASHFS_BLOCK": "1024k"})
    assert cfg.get_list("squashfs.options") == ["-comp", "xz"]
    assert cfg.get("squashfs.block") == "1024k"

def test_scalar_becomes_single_entry():
    cfg = Config(defaults={"cmdline": "one fragment", "n": 3})
    assert cfg.get_list("cmdline") == ["one fragment"]
    assert cfg.get_list("n") == ["3"]

def test_empty_file_is_ignored(tmp_path):
    cfg = Config()
    cfg.load_file(_yaml(tmp_path, "empty.yaml", ""))
    assert cfg.get_list("cmdline") == []

def test_bad_files(tmp_path):
    cfg = Config()
    with pytest.raises(NotFound):
        cfg.load_file(str(tmp_path / "nope.yaml"))
    with pytest.raises(ConfigError):
        cfg.load_file(_yaml(tmp_path, "bad.yaml", "cmdline: [unclosed\n"))
    with pytest.raises(ConfigError):
        cfg.load_file(_yaml(tmp_path, "list.yaml", "- a\n- b\n"))

def test_string_lines_are_kept_verbatim():
    cfg = Config(env={"UKI_CMDLINE": "  rd.debug  \n\n\tquiet\n"})
    assert cfg.get_list("cmdline") == ["  rd.debug  ", "\tquiet"]
