import pytest

from errors import ConfigurationError


def test_defaults(make_settings):
    settings = make_settings(CRICKET_API_BASE_URL=None, CRICKET_API_TOKEN=None)

    assert settings.port == 3000
    assert settings.api_base_url == "https://apicricketchampion.in/apiv4"
    assert settings.token_placement == "path"
    assert settings.token_param == "token"
    assert settings.upstream_paths == {}
    assert settings.cache_ttl_seconds == 60
    assert settings.cors_origins == ["*"]
    assert settings.is_production is False


def test_env_overrides(make_settings):
    settings = make_settings(
        PORT="8080",
        CRICKET_TOKEN_PLACEMENT="QUERY",
        CACHE_TTL_SECONDS="15",
        CORS_ORIGINS="https://a.example,https://b.example",
        CRICKET_UPSTREAM_PATHS='{"scorecard": "match-scorecard"}',
        ENVIRONMENT="production",
    )

    assert settings.port == 8080
    assert settings.token_placement == "query"
    assert settings.cache_ttl_seconds == 15
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.upstream_paths == {"scorecard": "match-scorecard"}
    assert settings.is_production is True


def test_legacy_token_variable_is_accepted(make_settings):
    settings = make_settings(CRICKET_API_TOKEN=None, CRICKET_V5_TOKEN="v5-token")

    assert settings.require_token() == "v5-token"
    assert settings.validate() == []


def test_missing_token_is_reported_not_fatal(make_settings):
    settings = make_settings(CRICKET_API_TOKEN=None)

    assert settings.validate() == ["CRICKET_API_TOKEN"]
    with pytest.raises(ConfigurationError) as exc_info:
        settings.require_token()
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize(
    "env, message",
    [
        ({"CRICKET_TOKEN_PLACEMENT": "header"}, "CRICKET_TOKEN_PLACEMENT"),
        ({"CRICKET_UPSTREAM_PATHS": "{not json"}, "not valid JSON"),
        ({"CRICKET_UPSTREAM_PATHS": '["homeList"]'}, "JSON object"),
        ({"CACHE_TTL_SECONDS": "soon"}, "could not convert"),
    ],
)
def test_malformed_values_raise(make_settings, env, message):
    with pytest.raises(ValueError, match=message):
        make_settings(**env)
