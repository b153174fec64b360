"""Google Cloud Translation provider (v2)."""

import html
from typing import Any, Dict, Optional, Sequence, Tuple

from google.api_core.exceptions import GoogleAPIError
from google.cloud import translate_v2 as translate
from google.oauth2 import service_account

from autosolver.core.config import Settings, settings
from autosolver.core.exceptions import LanguageDetectionError, TranslationServiceError
from autosolver.core.logging import get_logger
from .base import TranslationProvider

logger = get_logger(__name__)


class GoogleTranslateProvider(TranslationProvider):
    def __init__(
        self,
        client: Optional[translate.Client] = None,
        min_confidence: Optional[float] = None,
        config: Settings = settings,
    ):
        logger.info("Translation: initializing Google Translate client")
        self.config = config
        self.client = client or self._build_client()
        self.min_confidence = (
            config.detection_min_confidence if min_confidence is None else min_confidence
        )
        logger.info("Translation: Google Translate client ready")

    def _build_client(self) -> translate.Client:
        credentials_path = self.config.google_application_credentials
        if not credentials_path:
            raise RuntimeError(
                "Translation: google_application_credentials must be configured in the autosolver settings."
            )

        credentials = service_account.Credentials.from_service_account_file(
            credentials_path
        )
        logger.info("Translation: using Google credentials from %s", credentials_path)
        return translate.Client(credentials=credentials)

    def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> Tuple[str, Dict[str, Any]]:
        try:
            response = self.client.translate(
                text,
                source_language=source_lang,
                target_language=target_lang,
                format_="text",
            )
        except GoogleAPIError as exc:
            logger.error(
                "Translation: Google API error",
                exc_info=exc,
            )
            raise TranslationServiceError(
                "Translation request failed", detail=str(exc)
            ) from exc

        translated_text = response.get("translatedText")
        if translated_text is None:
            raise TranslationServiceError(
                "Translation response carried no text", detail=repr(text)
            )
        metadata = {
            "detected_source_language": response.get("detectedSourceLanguage"),
            "model": response.get("model"),
        }
        return html.unescape(translated_text), metadata

    def detect_language(self, text: str, allowed_languages: Sequence[str]) -> str:
        try:
            response = self.client.detect_language(text)
        except GoogleAPIError as exc:
            logger.error(
                "Translation: Google API error during detection",
                exc_info=exc,
            )
            raise TranslationServiceError(
                "Language detection request failed", detail=str(exc)
            ) from exc

        code = (response.get("language") or "").lower()
        confidence = response.get("confidence") or 0.0
        if code in ("", "und"):
            raise LanguageDetectionError("Language could not be decided", detail=repr(text))
        if confidence < self.min_confidence:
            raise LanguageDetectionError(
                "Language detection below confidence threshold",
                detail=f"{code} at {confidence:.2f} for {text!r}",
            )

        base_code = code.split("-")[0]
        if base_code not in allowed_languages:
            raise LanguageDetectionError(
                "Detected language outside the allow-list",
                detail=f"{code} for {text!r}",
            )
        return base_code
