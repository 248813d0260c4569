"""Shipi18n API client."""

import json
from typing import List, Dict, Any, Optional, Sequence, Union

import requests

from shipi18n.config import ClientConfig, API_KEY_ENV, get_config
from shipi18n.errors import (
    ConfigurationError,
    Shipi18nError,
    ServiceError,
    TransportError,
    ValidationError,
)
from shipi18n.results import JSONTranslationResult
from shipi18n.run_logging import RunLogger

DEFAULT_SOURCE_LANGUAGE = "en"

TranslationPair = Dict[str, str]
TextTranslationResult = Dict[str, List[TranslationPair]]


def _flag(value: bool) -> str:
    # The service expects booleans as the strings "true"/"false"
    return "true" if value else "false"


def _dump_compact(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def _is_empty_document(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple)):
        return len(value) == 0
    return False


class Shipi18nClient:
    """Client for the Shipi18n translation API."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        run_logger: Optional[RunLogger] = None
    ):
        """
        Initialize the client.

        Args:
            config: Explicit configuration. If None, the process-wide
                configuration is read on every call (see shipi18n.config).
            run_logger: Optional run logger; nothing is logged without one.
        """
        self._config = config
        self.run_logger = run_logger

    @property
    def config(self) -> ClientConfig:
        return self._config if self._config is not None else get_config()

    def _url(self, config: ClientConfig, path: str) -> str:
        return f"{config.api_base_url}{path}"

    def _require_api_key(self, config: ClientConfig) -> str:
        if not config.api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
        return config.api_key

    def _validate_target_languages(self, target_languages: Any) -> List[str]:
        if not isinstance(target_languages, (list, tuple)) or len(target_languages) == 0:
            raise ValidationError("targetLanguages must be a non-empty array")
        if not all(isinstance(lang, str) and lang for lang in target_languages):
            raise ValidationError("targetLanguages must contain language code strings")
        return list(target_languages)

    def _fail(self, operation: str, error: Shipi18nError) -> Shipi18nError:
        if self.run_logger:
            self.run_logger.log_failure(operation, error)
        return error

    def _send(
        self,
        operation: str,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> requests.Response:
        """Issue a single request; transport failures become TransportError."""
        if self.run_logger:
            self.run_logger.log_request(operation, url, payload)

        try:
            if method == "POST":
                return requests.post(url, json=payload, headers=headers, timeout=timeout)
            return requests.get(url, headers=headers, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise self._fail(
                operation,
                TransportError(f"Request to {url} failed: {e}")
            ) from e

    def _decode_body(self, operation: str, response: requests.Response, prefix: str) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise self._fail(
                operation,
                ServiceError(
                    f"{prefix}: invalid JSON response",
                    status=response.status_code
                )
            ) from e

        if self.run_logger:
            self.run_logger.log_response(operation, response.status_code, body)
        return body

    def _translation_error(self, response: requests.Response) -> ServiceError:
        """
        Build a ServiceError from a non-success translate response.

        Accepts the structured format {"error": {"code", "message"}} and the
        legacy {"message"} format; falls back to the HTTP reason phrase.
        """
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        error = data.get("error")
        if not isinstance(error, dict):
            error = {}

        message = (
            error.get("message")
            or data.get("message")
            or f"Translation failed: {response.reason}"
        )
        return ServiceError(
            str(message),
            code=error.get("code") or None,
            status=response.status_code
        )

    def _post_translate(
        self,
        operation: str,
        config: ClientConfig,
        api_key: str,
        text: str,
        source_language: Optional[str],
        target_languages: List[str],
        preserve_placeholders: bool,
        enable_pluralization: bool
    ) -> Any:
        url = self._url(config, "/api/translate")
        headers = {
            "Content-Type": "application/json",
            "X-API-Key": api_key
        }
        payload = {
            "inputMethod": "text",
            "text": text,
            "sourceLanguage": source_language or DEFAULT_SOURCE_LANGUAGE,
            "targetLanguages": _dump_compact(target_languages),
            "preservePlaceholders": _flag(preserve_placeholders),
            "enablePluralization": _flag(enable_pluralization),
        }

        response = self._send(
            operation, "POST", url,
            payload=payload, headers=headers, timeout=config.timeout
        )
        if not response.ok:
            raise self._fail(operation, self._translation_error(response))

        return self._decode_body(operation, response, "Translation failed")

    def translate(
        self,
        text: Optional[str] = None,
        target_languages: Optional[Sequence[str]] = None,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        preserve_placeholders: bool = False,
        enable_pluralization: bool = True
    ) -> TextTranslationResult:
        """
        Translate text to one or more target languages.

        Args:
            text: The text to translate
            target_languages: Target language codes (e.g., ["es", "fr", "de"])
            source_language: Source language code (default: "en")
            preserve_placeholders: Keep placeholders like {name}, {{value}}, %s untranslated
            enable_pluralization: Let the service generate plural forms

        Returns:
            Translation results keyed by language code, e.g.
            {"es": [{"original": "Hello", "translated": "Hola"}]}

        Raises:
            ConfigurationError: If no API key is configured
            ValidationError: If text or target_languages is invalid
            ServiceError: If the service responds with a failure
            TransportError: If no response was received
        """
        config = self.config
        api_key = self._require_api_key(config)

        if not text or not isinstance(text, str):
            raise ValidationError("Text parameter is required and must be a string")

        languages = self._validate_target_languages(target_languages)

        return self._post_translate(
            "translate", config, api_key, text, source_language, languages,
            preserve_placeholders, enable_pluralization
        )

    def translate_json(
        self,
        json_input: Union[Dict[str, Any], List[Any], str, None] = None,
        target_languages: Optional[Sequence[str]] = None,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        preserve_placeholders: bool = False,
        enable_pluralization: bool = True
    ) -> JSONTranslationResult:
        """
        Translate JSON content while preserving its structure.

        Only string values are translated; keys, nesting and array order
        are kept. A language whose payload is not valid JSON comes back as
        the raw string instead of failing the call.

        Args:
            json_input: JSON value or JSON text
            target_languages: Target language codes
            source_language: Source language code (default: "en")
            preserve_placeholders: Keep placeholders in values untranslated
            enable_pluralization: Let the service generate plural forms

        Returns:
            JSONTranslationResult, e.g. {"es": {"greeting": "Hola"}}, with
            a "warnings" entry when the service sent one
        """
        operation = "translate_json"
        config = self.config
        api_key = self._require_api_key(config)

        if _is_empty_document(json_input):
            raise ValidationError("JSON parameter is required")

        languages = self._validate_target_languages(target_languages)

        if isinstance(json_input, str):
            text = json_input
        else:
            try:
                text = _dump_compact(json_input)
            except (TypeError, ValueError) as e:
                raise ValidationError("JSON parameter must be JSON-serializable") from e

        body = self._post_translate(
            operation, config, api_key, text, source_language, languages,
            preserve_placeholders, enable_pluralization
        )
        if not isinstance(body, dict):
            raise self._fail(
                operation,
                ServiceError("Translation failed: unexpected response format")
            )

        return JSONTranslationResult.from_response(body)

    def health_check(self) -> Dict[str, Any]:
        """
        Check API health. No API key is required.

        Returns:
            Health status, e.g. {"status": "healthy", "version": "1.0.0"}
        """
        operation = "health_check"
        config = self.config
        url = self._url(config, "/api/health")

        response = self._send(operation, "GET", url, timeout=config.timeout)
        if not response.ok:
            raise self._fail(
                operation,
                ServiceError(
                    f"Health check failed: {response.reason}",
                    status=response.status_code
                )
            )

        return self._decode_body(operation, response, "Health check failed")


def translate(
    text: Optional[str] = None,
    target_languages: Optional[Sequence[str]] = None,
    source_language: str = DEFAULT_SOURCE_LANGUAGE,
    preserve_placeholders: bool = False,
    enable_pluralization: bool = True
) -> TextTranslationResult:
    """Translate text using the process-wide configuration."""
    return Shipi18nClient().translate(
        text,
        target_languages,
        source_language=source_language,
        preserve_placeholders=preserve_placeholders,
        enable_pluralization=enable_pluralization
    )


def translate_json(
    json_input: Union[Dict[str, Any], List[Any], str, None] = None,
    target_languages: Optional[Sequence[str]] = None,
    source_language: str = DEFAULT_SOURCE_LANGUAGE,
    preserve_placeholders: bool = False,
    enable_pluralization: bool = True
) -> JSONTranslationResult:
    """Translate a JSON document using the process-wide configuration."""
    return Shipi18nClient().translate_json(
        json_input,
        target_languages,
        source_language=source_language,
        preserve_placeholders=preserve_placeholders,
        enable_pluralization=enable_pluralization
    )


def health_check() -> Dict[str, Any]:
    """Check API health using the process-wide configuration."""
    return Shipi18nClient().health_check()
