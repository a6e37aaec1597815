"""Tests for main module."""

from macromate import main as main_module


def test_main_serves_app_on_configured_port(monkeypatch) -> None:
    calls: list[tuple[str, dict[str, object]]] = []

    def fake_run(app: str, **kwargs: object) -> None:
        calls.append((app, kwargs))

    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls[0][0] == "macromate.api.asgi:app"
    assert calls[0][1]["port"] == 9090
    assert calls[0][1]["host"] == "0.0.0.0"  # noqa: S104
