"""
Cliente de Gemini para textos generados

Dos usos:
- Descripción comercial breve de un producto de ferretería
- Consejos estratégicos a partir de un resumen de ventas

Las llamadas nunca hacen fallar al endpoint que las usa: ante cualquier
error se registra el problema y se devuelve un texto de reemplazo.
"""
import logging
from typing import Optional

import httpx

from ferrepos.core.config import settings

logger = logging.getLogger(__name__)

DESCRIPTION_FALLBACK = "Descripción no disponible en este momento."
ANALYSIS_FALLBACK = "No se pudo generar el análisis en este momento."


class GeminiService:
    """Wrapper mínimo sobre el endpoint generateContent de Gemini"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_URL).rstrip('/')
        self.timeout = timeout or settings.GEMINI_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate_text(self, prompt: str) -> str:
        """
        Enviar un prompt y devolver el texto de la primera candidata.

        Raises:
            RuntimeError: sin API key configurada
            httpx.HTTPError: error de red o respuesta no 2xx
            ValueError: respuesta sin texto
        """
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY no configurada")

        response = httpx.post(
            self.endpoint,
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()

        data = response.json()
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            raise ValueError("Respuesta de Gemini sin candidatos")

        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise ValueError("Respuesta de Gemini vacía")
        return text

    def generate_product_description(self, product_name: str, category: Optional[str] = None) -> str:
        prompt = (
            "Escribe una descripción técnica y comercial breve (máximo 25 palabras) "
            "para un producto de ferretería.\n"
            f"Producto: {product_name}.\n"
            f"Categoría: {category or 'General'}.\n"
            "Idioma: Español."
        )
        try:
            return self.generate_text(prompt)
        except (RuntimeError, ValueError, httpx.HTTPError) as e:
            logger.warning(f"Error generating description: {e}")
            return DESCRIPTION_FALLBACK

    def analyze_sales_trends(self, sales_summary: str) -> str:
        prompt = (
            "Actúa como un analista de negocios experto para una ferretería.\n"
            "Analiza los siguientes datos de ventas resumidos y dame 3 consejos "
            "estratégicos breves para mejorar la rentabilidad o el stock.\n"
            f"Datos: {sales_summary}\n"
            "Formato: Lista de 3 puntos."
        )
        try:
            return self.generate_text(prompt)
        except (RuntimeError, ValueError, httpx.HTTPError) as e:
            logger.warning(f"Error analyzing trends: {e}")
            return ANALYSIS_FALLBACK


def get_ai_service() -> GeminiService:
    """Dependencia FastAPI (reemplazable en tests)"""
    return GeminiService()
