#!/usr/bin/env python3
"""
Chargeur de settings depuis les variables d'environnement.

Ce module récupère et convertit les variables d'environnement en
paramètres de configuration typés, avec repli sur parameters.yaml.
"""

import os
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

from .constants import DEFAULT_BOOK_LENGTH, DEFAULT_SINK_MAXSIZE
from .env_validator import validate_environment_variables
from .urls import URLConfig

# Charger les variables d'environnement depuis le fichier .env
load_dotenv()

PARAMETERS_FILE = "src/parameters.yaml"


def safe_int(value: Optional[str]) -> Optional[int]:
    """
    Convertit une valeur en int de manière sécurisée.

    Returns:
        int ou None si la conversion échoue
    """
    try:
        return int(value) if value not in (None, "") else None
    except (ValueError, TypeError):
        return None


def safe_bool(value: Optional[str]) -> Optional[bool]:
    """Convertit "true"/"false" (insensible à la casse) en booléen."""
    if value is None or value == "":
        return None
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_yaml_parameters(path: str = PARAMETERS_FILE) -> Dict:
    """Charge la section bitfinex_ws de parameters.yaml (vide si absente)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError:
        return {}

    section = yaml_config.get("bitfinex_ws") if isinstance(yaml_config, dict) else None
    return section if isinstance(section, dict) else {}


def get_settings() -> Dict:
    """
    Retourne un dictionnaire avec les paramètres de configuration
    depuis les variables d'environnement.

    Priorité : variable d'environnement → parameters.yaml → valeur par défaut.

    Returns:
        dict: Dictionnaire contenant les paramètres de configuration
    """
    validate_environment_variables()

    yaml_params = load_yaml_parameters()

    # Chaînes vides → None (usage public uniquement sans credentials)
    api_key = os.getenv("BITFINEX_API_KEY") or None
    api_secret = os.getenv("BITFINEX_API_SECRET") or None

    ws_url = os.getenv("BITFINEX_WS_URL") or yaml_params.get("ws_url") or URLConfig.DEFAULT_WS_URL

    tls_skip_verify = safe_bool(os.getenv("WS_TLS_SKIP_VERIFY"))
    if tls_skip_verify is None:
        tls_skip_verify = bool(yaml_params.get("tls_skip_verify", False))

    sink_maxsize = safe_int(os.getenv("SINK_MAXSIZE"))
    if sink_maxsize is None:
        sink_maxsize = safe_int(yaml_params.get("sink_maxsize"))
    if sink_maxsize is None:
        sink_maxsize = DEFAULT_SINK_MAXSIZE

    book_length = safe_int(os.getenv("BOOK_LENGTH"))
    if book_length is None:
        book_length = safe_int(yaml_params.get("book_length")) or DEFAULT_BOOK_LENGTH

    return {
        "ws_url": ws_url,
        "tls_skip_verify": tls_skip_verify,
        "api_key": api_key,
        "api_secret": api_secret,
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "sink_maxsize": sink_maxsize,
        "book_length": book_length,
    }
