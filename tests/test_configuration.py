from __future__ import annotations

import pytest

from pykeyconf import Configuration, CustomConfigKey
from pykeyconf.errors import ArgumentError, DuplicateKeyError


def _keys(*names: str) -> list[CustomConfigKey]:
    return [CustomConfigKey(n) for n in names]


def _assert_views_agree(cfg: Configuration) -> None:
    assert len(cfg.names()) == len(set(cfg.names()))
    for i, key in enumerate(cfg):
        assert cfg[key.name] is key
        assert cfg[i] is key


def test_insertion_order_and_dual_access():
    a, b, c = _keys("a", "b", "c")
    cfg = Configuration(a, b)
    cfg.add(c)
    assert cfg.names() == ["a", "b", "c"]
    assert cfg[0] is a
    assert cfg["c"] is c
    assert len(cfg) == cfg.count == 3
    _assert_views_agree(cfg)


def test_construct_from_iterable():
    cfg = Configuration(_keys("x", "y"))
    assert cfg.names() == ["x", "y"]


def test_duplicate_add_leaves_views_untouched():
    cfg = Configuration(*_keys("a", "b"))
    with pytest.raises(DuplicateKeyError):
        cfg.add(CustomConfigKey("a"))
    with pytest.raises(DuplicateKeyError):
        cfg.insert(0, CustomConfigKey("b"))
    assert cfg.names() == ["a", "b"]
    _assert_views_agree(cfg)


def test_insert_and_remove_through_both_views():
    cfg = Configuration(*_keys("a", "c"))
    cfg.insert(1, CustomConfigKey("b"))
    assert cfg.names() == ["a", "b", "c"]
    removed = cfg.remove_at(0)
    assert removed.name == "a"
    assert "a" not in cfg
    assert cfg.remove("c") is True
    assert cfg.remove("c") is False
    assert cfg.names() == ["b"]
    del cfg["b"]
    assert len(cfg) == 0
    with pytest.raises(KeyError):
        del cfg["b"]


def test_remove_by_identity():
    a = CustomConfigKey("a")
    cfg = Configuration(a)
    assert cfg.remove(CustomConfigKey("a")) is False
    assert cfg.remove(a) is True


def test_set_by_name_requires_same_name():
    cfg = Configuration(*_keys("a", "b"))
    replacement = CustomConfigKey("b")
    cfg["b"] = replacement
    assert cfg[1] is replacement
    with pytest.raises(ArgumentError):
        cfg["b"] = CustomConfigKey("renamed")
    _assert_views_agree(cfg)


def test_set_by_index_renames_and_detects_duplicates():
    cfg = Configuration(*_keys("a", "b"))
    cfg[0] = CustomConfigKey("z")
    assert cfg.names() == ["z", "b"]
    assert "a" not in cfg
    with pytest.raises(DuplicateKeyError):
        cfg[0] = CustomConfigKey("b")
    _assert_views_agree(cfg)


def test_lookup_helpers():
    a = CustomConfigKey("a")
    cfg = Configuration(a)
    assert cfg.contains_key("a")
    assert a in cfg
    assert CustomConfigKey("a") not in cfg
    assert cfg.try_get_key("a") == (True, a)
    assert cfg.try_get_key("missing") == (False, None)
    assert cfg.get("missing") is None
    assert cfg.index(a) == 0
    assert cfg.index("a") == 0
    with pytest.raises(KeyError):
        cfg["missing"]
    cfg.clear()
    assert cfg.names() == []


def test_add_rejects_non_keys():
    with pytest.raises(ArgumentError):
        Configuration().add("a")  # type: ignore[arg-type]
