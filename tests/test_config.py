import pytest

from stripe_payments.api import create_token_client
from stripe_payments.core.config import ClientConfig, ClientParameters, ConfigError, load_client_config
from stripe_payments.core.environment import build_environment


def test_from_mapping_applies_defaults():
    config = ClientConfig.from_mapping({"STRIPE_API_KEY": " sk_test_abc "})

    assert config == ClientConfig(api_key="sk_test_abc")
    assert config.endpoint == "https://api.stripe.com"
    assert config.timeout_seconds == 30.0
    assert config.api_version is None
    assert config.livemode is False


def test_from_mapping_reads_every_setting():
    config = ClientConfig.from_mapping(
        {
            "STRIPE_API_KEY": "rk_live_abc",
            "STRIPE_ENDPOINT": "http://localhost:12111/",
            "STRIPE_TIMEOUT_SECONDS": "2.5",
            "STRIPE_API_VERSION": "2017-08-15",
        }
    )

    assert config.endpoint == "http://localhost:12111"
    assert config.url("/v1/tokens") == "http://localhost:12111/v1/tokens"
    assert config.timeout_seconds == 2.5
    assert config.api_version == "2017-08-15"
    assert config.livemode is True


@pytest.mark.parametrize(
    "values",
    [
        {},
        {"STRIPE_API_KEY": "   "},
        {"STRIPE_API_KEY": "pk_test_abc"},
        {"STRIPE_API_KEY": "sk_test_abc", "STRIPE_ENDPOINT": "api.stripe.com"},
        {"STRIPE_API_KEY": "sk_test_abc", "STRIPE_TIMEOUT_SECONDS": "soon"},
        {"STRIPE_API_KEY": "sk_test_abc", "STRIPE_TIMEOUT_SECONDS": "0"},
    ],
)
def test_invalid_settings_raise_config_error(values):
    with pytest.raises(ConfigError):
        ClientConfig.from_mapping(values)


def test_env_file_fills_gaps_and_overrides_win(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local settings\n"
        "export STRIPE_API_KEY='sk_test_from_file'\n"
        "STRIPE_TIMEOUT_SECONDS=10\n"
        "not a setting\n",
        encoding="utf-8",
    )

    config = load_client_config(
        env_file=str(env_file),
        base={"STRIPE_TIMEOUT_SECONDS": "3"},
        overrides={"STRIPE_API_VERSION": "2020-08-27"},
    )

    assert config.api_key == "sk_test_from_file"
    assert config.timeout_seconds == 3.0
    assert config.api_version == "2020-08-27"


def test_keyword_parameters_beat_overrides(tmp_path):
    config = load_client_config(
        env_file=None,
        base={},
        overrides={"STRIPE_API_KEY": "sk_test_override"},
        parameters=ClientParameters(endpoint="https://stripe.test"),
        api_key="sk_test_keyword",
    )

    assert config.api_key == "sk_test_keyword"
    assert config.endpoint == "https://stripe.test"


def test_missing_env_file_is_ignored(tmp_path):
    environment = build_environment(
        env_file=str(tmp_path / "missing.env"), base={"STRIPE_API_KEY": "sk_test_1"}
    )

    assert environment.variables == {"STRIPE_API_KEY": "sk_test_1"}


def test_env_file_does_not_replace_base_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("STRIPE_API_KEY=sk_test_file\nSTRIPE_ENDPOINT=https://stripe.test\n", encoding="utf-8")

    environment = build_environment(env_file=str(env_file), base={"STRIPE_API_KEY": "sk_test_env"})

    assert environment.variables == {
        "STRIPE_API_KEY": "sk_test_env",
        "STRIPE_ENDPOINT": "https://stripe.test",
    }


def test_client_factory_rejects_config_plus_parameters():
    config = ClientConfig(api_key="sk_test_abc")

    with pytest.raises(ValueError):
        create_token_client(config=config, api_key="sk_test_other")

    assert create_token_client(config=config).config is config
