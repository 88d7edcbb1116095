"""
Tests del cliente de Gemini (sin red: httpx.post se reemplaza)
"""

import httpx
import pytest

from ferrepos.modules.ai import service
from ferrepos.modules.ai import GeminiService, DESCRIPTION_FALLBACK, ANALYSIS_FALLBACK


def _fake_post(status_code=200, payload=None, calls=None):
    def fake_post(url, params=None, json=None, headers=None, timeout=None):
        if calls is not None:
            calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        return httpx.Response(status_code, json=payload or {}, request=httpx.Request("POST", url))
    return fake_post


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def gemini():
    return GeminiService(api_key="clave", model="gemini-test", base_url="https://gemini.example.com/v1beta/",
                         timeout=3)


class TestGenerateText:

    def test_sends_prompt_and_reads_candidate(self, gemini, monkeypatch):
        calls = []
        monkeypatch.setattr(service.httpx, "post", _fake_post(payload=_reply("  Hola  "), calls=calls))

        assert gemini.generate_text("Decí hola") == "Hola"
        assert calls[0]["url"] == "https://gemini.example.com/v1beta/models/gemini-test:generateContent"
        assert calls[0]["params"] == {"key": "clave"}
        assert calls[0]["json"]["contents"][0]["parts"][0]["text"] == "Decí hola"
        assert calls[0]["timeout"] == 3

    def test_without_api_key(self):
        with pytest.raises(RuntimeError):
            GeminiService(api_key="").generate_text("x")

    def test_http_error(self, gemini, monkeypatch):
        monkeypatch.setattr(service.httpx, "post", _fake_post(status_code=500))
        with pytest.raises(httpx.HTTPStatusError):
            gemini.generate_text("x")

    def test_empty_candidates(self, gemini, monkeypatch):
        monkeypatch.setattr(service.httpx, "post", _fake_post(payload={"candidates": []}))
        with pytest.raises(ValueError):
            gemini.generate_text("x")

    def test_blank_text(self, gemini, monkeypatch):
        monkeypatch.setattr(service.httpx, "post", _fake_post(payload=_reply("   ")))
        with pytest.raises(ValueError):
            gemini.generate_text("x")


class TestFallbacks:

    def test_description(self, gemini, monkeypatch):
        calls = []
        monkeypatch.setattr(service.httpx, "post", _fake_post(payload=_reply("Taladro potente."), calls=calls))

        assert gemini.generate_product_description("Taladro", "Herramientas Eléctricas") == "Taladro potente."
        prompt = calls[0]["json"]["contents"][0]["parts"][0]["text"]
        assert "25 palabras" in prompt
        assert "Herramientas Eléctricas" in prompt

    def test_description_fallback(self, gemini, monkeypatch):
        monkeypatch.setattr(service.httpx, "post", _fake_post(status_code=503))
        assert gemini.generate_product_description("Taladro") == DESCRIPTION_FALLBACK

    def test_analysis_fallback_without_key(self):
        assert GeminiService(api_key="").analyze_sales_trends("Total ventas: 0") == ANALYSIS_FALLBACK

    def test_network_error_fallback(self, gemini, monkeypatch):
        def broken(*args, **kwargs):
            raise httpx.ConnectError("sin conexión")

        monkeypatch.setattr(service.httpx, "post", broken)
        assert gemini.analyze_sales_trends("datos") == ANALYSIS_FALLBACK
