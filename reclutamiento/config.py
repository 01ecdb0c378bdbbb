# RUTA: reclutamiento/config.py

import os
from dotenv import load_dotenv

# Hacemos la ruta al .env explícita para evitar problemas
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '..', '.env'))


def _bool_env(nombre, por_defecto):
    return os.environ.get(nombre, por_defecto).lower() in ['true', 'on', '1']


class Config:
    """
    Clase de configuración principal. Lee valores desde variables de entorno.
    La validación de SECRET_KEY se hace al crear la app (ver create_app).
    """
    # --- CONFIGURACIÓN DE SEGURIDAD DE FLASK ---
    SECRET_KEY = os.environ.get('SECRET_KEY')
    DEBUG = _bool_env('FLASK_DEBUG', 'False')
    TESTING = False
    SESSION_COOKIE_SECURE = _bool_env('SESSION_COOKIE_SECURE', 'False')

    # --- PERSISTENCIA ---
    # Ruta del archivo JSON con la instantánea de datos. Vacío = solo en memoria.
    DATA_FILE = os.environ.get('RECLUTAMIENTO_DATA_FILE', os.path.join(basedir, '..', 'instance', 'plataforma.json'))
    # Cargar los datos de demostración cuando todavía no hay instantánea
    SEED_DATA = _bool_env('RECLUTAMIENTO_SEED_DATA', 'True')

    # --- CREDENCIALES ---
    # 'texto_plano' (comparación exacta) o 'hash' (werkzeug)
    CREDENTIAL_VERIFIER = os.environ.get('CREDENTIAL_VERIFIER', 'texto_plano')

    # --- LOGGING ---
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')

    # --- LÍMITE DE PETICIONES (Flask-Limiter) ---
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')

    # --- REPORTES ---
    HISTOGRAMA_TOP_N = int(os.environ.get('HISTOGRAMA_TOP_N', 10))

    # Tamaño máximo de una petición (importaciones y logos en base64): 20 MB
    MAX_CONTENT_LENGTH = 20 * 1024 * 1024


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'clave-de-pruebas'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    DATA_FILE = None
    SEED_DATA = True
    CREDENTIAL_VERIFIER = 'texto_plano'
