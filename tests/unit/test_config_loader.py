"""Tests for the config_loader module."""

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
import yaml

from cycle_fixtures import (
    CHAIN_ID,
    QUOTER_ADDR,
    SUSHI_PAIR_ADDR,
    USDC_ADDR,
    VAULT_ADDR,
    WETH_0_04,
    stub_config_dict,
)
from flash_arbitrage.config_loader import (
    ArbitrageConfig,
    build_config,
    load_config,
    load_yaml_config,
    parse_positive_amount,
)
from flash_arbitrage.exceptions import ConfigurationError

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"


def test_load_yaml_config_valid():
    """Test loading a valid YAML configuration."""
    config_data = stub_config_dict()

    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(config_data, f)
        f.flush()

        result = load_yaml_config(f.name)
        assert result == config_data

    Path(f.name).unlink()


def test_load_yaml_config_file_not_found():
    """Test loading config from non-existent file."""
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_yaml_config("/non/existent/file.yaml")


def test_load_yaml_config_empty_file():
    """Test loading config from empty file."""
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("")
        f.flush()

        with pytest.raises(ConfigurationError, match="Empty configuration file"):
            load_yaml_config(f.name)

    Path(f.name).unlink()


def test_load_yaml_config_invalid_yaml():
    """Test loading config with invalid YAML."""
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("invalid: yaml: content: [")
        f.flush()

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml_config(f.name)

    Path(f.name).unlink()


def test_load_yaml_config_not_a_dict():
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write("- just\n- a list\n")
        f.flush()

        with pytest.raises(ConfigurationError, match="YAML dictionary"):
            load_yaml_config(f.name)

    Path(f.name).unlink()


def test_build_config_normalizes_tokens_and_venues():
    config = build_config(stub_config_dict(), environ={})

    assert isinstance(config, ArbitrageConfig)
    assert config.chain_id == CHAIN_ID
    assert config.provider == "stub"

    usdc = config.tokens["USDC"]
    assert usdc.address == USDC_ADDR
    assert usdc.decimals == 6
    assert usdc.chain_id == CHAIN_ID

    assert config.flash_loan.address == VAULT_ADDR
    assert config.venue("sushiswap_v2").address == SUSHI_PAIR_ADDR
    assert config.venue("sushiswap_v2").fee_bps == 30
    assert config.venue("uniswap_v3").quoter == QUOTER_ADDR


def test_build_config_converts_stub_outputs_to_units():
    config = build_config(stub_config_dict(), environ={})

    assert config.stub_swap_outputs == {
        ("USDC", "WETH"): WETH_0_04,
        ("WETH", "USDC"): 104_000000,
    }


def test_config_mappings_are_read_only():
    config = build_config(stub_config_dict(), environ={})

    with pytest.raises(TypeError):
        config.tokens["DAI"] = config.tokens["USDC"]
    with pytest.raises(TypeError):
        del config.venues["sushiswap_v2"]
    with pytest.raises(TypeError):
        config.stub_swap_outputs[("USDC", "WETH")] = 1

    assert set(config.tokens) == {"USDC", "WETH"}
    assert "sushiswap_v2" in config.venues
    assert config.stub_swap_outputs[("USDC", "WETH")] == WETH_0_04


def test_config_does_not_alias_caller_dicts():
    config = build_config(stub_config_dict(), environ={})
    tokens = dict(config.tokens)
    rebuilt = ArbitrageConfig(
        chain_id=config.chain_id,
        provider=config.provider,
        tokens=tokens,
        flash_loan=config.flash_loan,
        venues=config.venues,
        cycle=config.cycle,
    )

    tokens.clear()
    assert rebuilt.tokens["USDC"] == config.tokens["USDC"]


def test_borrow_amount_and_override():
    config = build_config(stub_config_dict(), environ={})

    assert config.borrow_amount().value == 100_000000
    assert config.borrow_amount("0.5").value == 500000
    assert config.borrow_token.symbol == "USDC"
    assert config.intermediate_token.symbol == "WETH"


def test_numeric_borrow_amount_is_accepted():
    raw = stub_config_dict()
    raw["cycle"]["borrow_amount"] = 250
    config = build_config(raw, environ={})

    assert config.borrow_amount().value == 250_000000


@pytest.mark.parametrize("bad_amount", ["0", "-5", "abc", "1.0000001"])
def test_bad_borrow_amount_rejected_at_startup(bad_amount):
    raw = stub_config_dict()
    raw["cycle"]["borrow_amount"] = bad_amount

    with pytest.raises(ConfigurationError):
        build_config(raw, environ={})


def test_unknown_token_and_venue_lookups():
    config = build_config(stub_config_dict(), environ={})

    with pytest.raises(ConfigurationError, match="Unknown token"):
        config.token("DAI")
    with pytest.raises(ConfigurationError, match="Unknown venue"):
        config.venue("curve")


def test_rpc_url_from_environment_wins():
    config = build_config(
        stub_config_dict(), environ={"TEST_PROVIDER_URL": " https://env.example.org "}
    )
    assert config.rpc_url == "https://env.example.org"


def test_rpc_url_falls_back_to_file():
    config = build_config(stub_config_dict(), environ={"TEST_PROVIDER_URL": "  "})
    assert config.rpc_url == "https://rpc.example.org"


def test_rpc_url_may_be_absent():
    raw = stub_config_dict()
    del raw["rpc_url"]
    config = build_config(raw, environ={})
    assert config.rpc_url is None


def test_validation_error_is_configuration_error():
    raw = stub_config_dict(chain_id=0)

    with pytest.raises(ConfigurationError, match="Configuration validation failed") as exc_info:
        build_config(raw, environ={})
    assert exc_info.value.details["errors"]


def test_unexpected_top_level_type_is_configuration_error():
    with pytest.raises(ConfigurationError):
        build_config(["not", "a", "dict"], environ={})


def test_parse_positive_amount_labels_errors():
    config = build_config(stub_config_dict(), environ={})

    with pytest.raises(ConfigurationError, match="Stub output must be positive"):
        parse_positive_amount(config.tokens["USDC"], "0", "stub output")


def test_config_is_frozen():
    config = build_config(stub_config_dict(), environ={})
    with pytest.raises(AttributeError):
        config.provider = "onchain"


def test_load_config_from_file():
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(stub_config_dict(), f)
        f.flush()

        config = load_config(f.name, environ={})
        assert config.cycle.venue_a == "sushiswap_v2"

    Path(f.name).unlink()


def test_shipped_stub_config_loads():
    config = load_config(CONFIG_DIR / "flash_arb_stub.yaml", environ={})

    assert config.provider == "stub"
    assert config.environment == "development"
    assert config.borrow_amount().value == 100_000000
    assert config.stub_swap_outputs[("WETH", "USDC")] == 104_000000


def test_shipped_mainnet_config_loads():
    config = load_config(CONFIG_DIR / "flash_arb_eth.yaml", environ={})

    assert config.provider == "onchain"
    assert config.environment == "production"
    assert config.chain_id == 1
    assert config.venue(config.cycle.venue_b).kind == "uniswap_v3"
