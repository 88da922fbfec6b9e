# ============================================================
# src/core/config_loader.py: Cargador central de configuración
# ------------------------------------------------------------
# OBJETIVO:
#   Leer los valores por defecto de la librería desde un YAML
#   (src/config/config.yaml) y aplicar "overrides" desde
#   variables de entorno (.env).
#
# CARACTERÍSTICAS:
#   - Cache interna (evita relecturas del archivo).
#   - Overrides vía .env (LOG_LEVEL, BUFFER_CAPACITY, REPORT_DIR...).
#   - Validación mínima del esquema (claves imprescindibles).
#
# USO BÁSICO:
#   from core.config_loader import get_config, get_nested
#   cfg = get_config()
#   period = get_nested(cfg, "strategies", "noflat", "period")
#
# NOTA:
#   Este módulo NO configura logs (evita dependencia circular).
# ============================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Optional

from dotenv import load_dotenv
import yaml

# ------------------------------------------------------------
# Constantes y cache interna
# ------------------------------------------------------------
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "config.yaml"

_CONFIG_CACHE: Optional[Dict[str, Any]] = None

# ENV_VAR -> (ruta en config.yaml, conversor)
ENV_TO_CFG: Dict[str, tuple[tuple[str, ...], Callable[[str], Any]]] = {
    "LOG_LEVEL": (("environment", "log_level"), lambda s: s.upper()),
    "BUFFER_CAPACITY": (("pipeline", "buffer_capacity"), int),
    "REPORT_DIR": (("report", "output_dir"), str),
    "DELAY_PERIOD": (("strategies", "delay", "period"), int),
    "NOFLAT_PERIOD": (("strategies", "noflat", "period"), int),
    "NOFLAT_THRESHOLD": (("strategies", "noflat", "threshold"), float),
    "BBW_PERIOD": (("strategies", "bbw", "period"), int),
    "BBW_SENSITIVITY": (("strategies", "bbw", "sensitivity"), float),
}

REQUIRED_PATHS: List[tuple[str, ...]] = [
    ("environment", "log_level"),
    ("pipeline", "buffer_capacity"),
    ("report", "output_dir"),
    ("strategies", "delay", "period"),
    ("strategies", "noflat", "period"),
    ("strategies", "noflat", "threshold"),
    ("strategies", "bbw", "period"),
    ("strategies", "bbw", "sensitivity"),
]


# ------------------------------------------------------------
# Utilidades internas
# ------------------------------------------------------------
def _ensure_file_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"No se encontró el archivo de configuración: {path.resolve()}")


def _deep_set(d: MutableMapping[str, Any], keys: Iterable[str], value: Any) -> None:
    """
    Asigna value en un diccionario anidado siguiendo la lista de 'keys'.
    Crea los nodos intermedios si no existen.
    """
    keys = list(keys)
    current = d
    for k in keys[:-1]:
        if k not in current or not isinstance(current[k], dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value


# ------------------------------------------------------------
# Carga YAML + overrides desde .env
# ------------------------------------------------------------
def _load_yaml_config(path: Path) -> Dict[str, Any]:
    _ensure_file_exists(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"El YAML debe mapear a dict en la raíz. Archivo: {path}")
    return data


def _apply_env_overrides(cfg: Dict[str, Any]) -> None:
    """
    Aplica overrides de variables de entorno (.env) sobre el dict `cfg`.
    Un valor que no se puede convertir se ignora (se mantiene el del YAML).
    """
    load_dotenv(override=False)

    for env_var, (path_keys, convert) in ENV_TO_CFG.items():
        raw = os.getenv(env_var)
        if raw is None:
            continue
        try:
            value = convert(raw)
        except (TypeError, ValueError):
            continue
        _deep_set(cfg, path_keys, value)


def _validate_schema(cfg: Dict[str, Any]) -> None:
    """Lanza ValueError si falta alguna clave imprescindible."""
    missing = [
        ".".join(path_keys)
        for path_keys in REQUIRED_PATHS
        if get_nested(cfg, *path_keys, default=None) is None
    ]
    if missing:
        raise ValueError(
            "Faltan claves imprescindibles en config.yaml (o tras overrides): " + ", ".join(missing)
        )


# ------------------------------------------------------------
# API pública
# ------------------------------------------------------------
def get_config(path: Optional[Path | str] = None, use_cache: bool = True) -> Dict[str, Any]:
    """
    Devuelve la configuración como diccionario.
    - path: ruta alternativa al YAML (opcional).
    - use_cache: si True, reutiliza la última carga.
    """
    global _CONFIG_CACHE
    if use_cache and _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    cfg = _load_yaml_config(cfg_path)
    _apply_env_overrides(cfg)
    _validate_schema(cfg)

    _CONFIG_CACHE = cfg
    return cfg


def reload_config(path: Optional[Path | str] = None) -> Dict[str, Any]:
    """Fuerza la recarga del YAML y re-aplica overrides del .env."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = None
    return get_config(path=path, use_cache=False)


def get_nested(cfg: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Acceso seguro a valores anidados: get_nested(cfg, "report", "output_dir")
    Devuelve `default` si no existe la ruta.
    """
    node: Any = cfg
    for k in keys:
        if not isinstance(node, dict) or k not in node:
            return default
        node = node[k]
    return node
