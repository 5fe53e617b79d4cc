"""
Пакет JOSE Crypto
=================

Криптографический слой для токенов формата JWS/JWE (JSON Web Signature /
JSON Web Encryption).

Этот пакет предоставляет:
    - Фабрику верификаторов JWS с проверкой соответствия алгоритма и ключа
    - Direct-режим JWE (общий симметричный ключ без обёртки CEK)
    - AES-GCM (A128GCM, A256GCM) как нативный AEAD режим
    - AES-CBC + HMAC (A128CBC-HS256, A256CBC-HS512) с Concat KDF
    - Сравнение тегов в константное время
    - Подключаемую декомпрессию (DEF)

Пример базового использования:
    >>> from src.jose.core.header import JWEHeader
    >>> from src.jose.jwe import DirectDecrypter, DirectEncrypter
    >>>
    >>> key = os.urandom(32)
    >>> header = JWEHeader("dir", "A256GCM")
    >>> parts = DirectEncrypter(key).encrypt(header, b"Hello")
    >>> DirectDecrypter(key).decrypt(header, parts)
    b'Hello'

Управление логированием:
    >>> import os
    >>> os.environ['JOSE_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from src import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Отладочное логирование теперь включено")

Лицензия: MIT
Python: 3.10+
"""

import logging
import os
import sys

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__description__ = "JWS verifier dispatch and direct-mode JWE encryption"
__license__ = "MIT"
__python_requires__ = ">=3.10"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

_ROOT_LOGGER_NAME = "src.jose"

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"JOSE Crypto требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с консольным обработчиком (stderr)
    для WARNING и выше. Уровень самого логгера контролируется через
    переменную окружения JOSE_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR,
    CRITICAL), по умолчанию INFO.

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("JOSE_LOG_LEVEL", "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета.

    Логгеры именуются как 'src.jose.<module_name>' и наследуют
    конфигурацию от логгера пакета.

    Аргументы:
        module_name: Обычно `__name__` вызывающего модуля.

    Возвращает:
        Экземпляр logging.Logger.
    """
    if module_name.startswith(_ROOT_LOGGER_NAME):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_ROOT_LOGGER_NAME}.main")
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{module_name.lstrip('.')}")


_setup_logging()

__all__ = [
    "__version__",
    "get_logger",
]
