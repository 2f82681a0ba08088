import pytest

from structdigest import DEFAULT_MAX_DEPTH, DigestConfig, TextPolicy, load_config


def test_defaults():
    cfg = load_config()
    assert cfg.max_depth == DEFAULT_MAX_DEPTH == 100
    assert cfg.text_policy is TextPolicy.STRUCTURAL


def test_config_passthrough():
    cfg = DigestConfig(max_depth=5)
    assert load_config(cfg) is cfg


def test_dict_config():
    cfg = load_config({"max_depth": "50", "text_policy": "RENDER"})
    assert cfg == DigestConfig(max_depth=50, text_policy=TextPolicy.RENDER)


@pytest.mark.parametrize("bad", [
    {"max_depth": 0},
    {"max_depth": "deep"},
    {"text_policy": "pretty"},
    {"depth": 10},
])
def test_invalid_dict_config(bad):
    with pytest.raises(ValueError):
        load_config(bad)


def test_invalid_dataclass_config():
    with pytest.raises(ValueError):
        DigestConfig(max_depth=True)
    with pytest.raises(ValueError):
        DigestConfig(text_policy="render")
    with pytest.raises(ValueError):
        load_config(["max_depth", 3])
