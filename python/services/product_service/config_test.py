from product_service.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.service_name == "product-service"
    assert settings.dev_mode is False
    assert settings.port == 3000


def test_environment_from_env(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.dev_mode is True
    assert settings.port == 8080
