"""
Заголовки JWS/JWE.

Заголовок неизменяем после создания. Каноническая сериализованная форма
(Base64URL от компактного JSON) вычисляется один раз и используется
побайтно в AAD и MAC input. При разборе входящего сообщения сохраняется
исходный текст заголовка, а не пересериализованный.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.jose.core.base64url import Base64URL
from src.jose.core.exceptions import ValidationError

__all__ = ["JWSHeader", "JWEHeader"]


def _canonical(params: Dict[str, Any]) -> Base64URL:
    text = json.dumps(params, sort_keys=True, separators=(",", ":"))
    return Base64URL.from_bytes(text.encode("utf-8"))


def _load_json_object(serialized: str) -> Dict[str, Any]:
    try:
        params = json.loads(Base64URL(serialized).decode().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Invalid header: not a JSON object") from exc
    if not isinstance(params, dict):
        raise ValidationError("Invalid header: not a JSON object")
    return params


@dataclass(frozen=True)
class JWSHeader:
    """
    JWS заголовок.

    Attributes:
        algorithm: Идентификатор алгоритма подписи ("HS256", "ES384", ...).
                   Неизвестные имена сохраняются как есть.
        serialized: Каноническая Base64URL форма
    """

    algorithm: str
    serialized: Base64URL = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str) or not self.algorithm:
            raise ValidationError("The algorithm (alg) header parameter must be a non-empty string")
        object.__setattr__(self, "serialized", _canonical({"alg": self.algorithm}))


@dataclass(frozen=True)
class JWEHeader:
    """
    JWE заголовок.

    Attributes:
        algorithm: Режим управления ключами ("dir")
        encryption_method: Метод шифрования содержимого ("A128GCM", ...)
        compression_algorithm: Алгоритм сжатия ("DEF") или None
        party_u_info: Декодированный "epu" (только для Concat KDF)
        party_v_info: Декодированный "epv" (только для Concat KDF)
        serialized: Каноническая Base64URL форма (AAD / MAC input)

    Example:
        >>> header = JWEHeader("dir", "A128CBC-HS256", party_u_info=b"Alice")
        >>> header.serialized.decode()
        b'{"alg":"dir","enc":"A128CBC-HS256","epu":"QWxpY2U"}'
    """

    algorithm: str
    encryption_method: str
    compression_algorithm: Optional[str] = None
    party_u_info: Optional[bytes] = None
    party_v_info: Optional[bytes] = None
    serialized: Base64URL = field(default=None, repr=False, compare=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str) or not self.algorithm:
            raise ValidationError("The algorithm (alg) header parameter must be a non-empty string")
        if not isinstance(self.encryption_method, str) or not self.encryption_method:
            raise ValidationError(
                "The encryption method (enc) header parameter must be a non-empty string"
            )
        for name in ("party_u_info", "party_v_info"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, bytes):
                raise TypeError(f"{name} must be bytes, got {type(value).__name__}")

        if self.serialized is None:
            object.__setattr__(self, "serialized", _canonical(self.to_json_object()))
        else:
            object.__setattr__(self, "serialized", Base64URL(self.serialized))

    def to_json_object(self) -> Dict[str, Any]:
        """JSON представление заголовка (только заданные параметры)."""
        params: Dict[str, Any] = {
            "alg": self.algorithm,
            "enc": self.encryption_method,
        }
        if self.compression_algorithm is not None:
            params["zip"] = self.compression_algorithm
        if self.party_u_info is not None:
            params["epu"] = str(Base64URL.from_bytes(self.party_u_info))
        if self.party_v_info is not None:
            params["epv"] = str(Base64URL.from_bytes(self.party_v_info))
        return params

    @classmethod
    def parse(cls, serialized: str) -> "JWEHeader":
        """
        Разобрать заголовок из Base64URL текста, сохранив текст как есть.

        Raises:
            ValidationError: Некорректный Base64URL, JSON или обязательные поля
        """
        params = _load_json_object(serialized)

        alg = params.get("alg")
        enc = params.get("enc")
        if not isinstance(alg, str) or not isinstance(enc, str):
            raise ValidationError("Invalid JWE header: missing alg or enc")

        zip_alg = params.get("zip")
        if zip_alg is not None and not isinstance(zip_alg, str):
            raise ValidationError("Invalid JWE header: zip must be a string")

        epu = params.get("epu")
        epv = params.get("epv")
        for value in (epu, epv):
            if value is not None and not isinstance(value, str):
                raise ValidationError("Invalid JWE header: epu/epv must be Base64URL strings")

        return cls(
            algorithm=alg,
            encryption_method=enc,
            compression_algorithm=zip_alg,
            party_u_info=Base64URL(epu).decode() if epu is not None else None,
            party_v_info=Base64URL(epv).decode() if epv is not None else None,
            serialized=Base64URL(serialized),
        )
