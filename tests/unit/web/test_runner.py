from uvicorn.config import LOGGING_CONFIG

from studysphere.web import runner


class TestRunServer:
    def test_log_format_does_not_leak_into_uvicorn_defaults(self, config, monkeypatch):
        captured = {}
        original_access = LOGGING_CONFIG["formatters"]["access"]["fmt"]
        original_default = LOGGING_CONFIG["formatters"]["default"]["fmt"]
        monkeypatch.setattr(runner, "create_fastapi_app", lambda app, config: "asgi-app")
        monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: captured.update(kwargs, app=app))

        runner.run_server(object(), config)

        assert captured["app"] == "asgi-app"
        assert captured["log_config"]["formatters"]["access"]["fmt"].endswith("%(status_code)s")
        assert LOGGING_CONFIG["formatters"]["access"]["fmt"] == original_access
        assert LOGGING_CONFIG["formatters"]["default"]["fmt"] == original_default
        assert captured["port"] == config.port
