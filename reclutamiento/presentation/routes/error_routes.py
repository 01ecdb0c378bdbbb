# RUTA: reclutamiento/presentation/routes/error_routes.py
from flask import Blueprint, current_app, request

from reclutamiento.domain.exceptions import EntidadNoEncontradaError
from reclutamiento.presentation.routes.respuestas import error_json

# Se utiliza un Blueprint para organizar las rutas de manejo de errores.
error_bp = Blueprint('errors', __name__)

@error_bp.app_errorhandler(ValueError)
def operacion_invalida(error):
    """
    Manejador para transiciones inválidas y datos mal formados.

    Incluye TransicionInvalidaError: la operación se rechaza y el estado no cambia.
    """
    current_app.logger.warning(f"Operación rechazada en {request.path}: {error}")
    return error_json(str(error), 400)

@error_bp.app_errorhandler(EntidadNoEncontradaError)
def entidad_no_encontrada(error):
    current_app.logger.warning(f"Entidad no encontrada en {request.path}: {error}")
    return error_json(str(error), 404)

@error_bp.app_errorhandler(PermissionError)
def sin_permiso(error):
    current_app.logger.warning(f"SEGURIDAD: Acceso denegado en {request.path}: {error}")
    return error_json(str(error) or 'No tiene permisos para realizar esta acción.', 403)

@error_bp.app_errorhandler(404)
def not_found_error(error):
    """Manejador para errores 404 (Página no encontrada)."""
    current_app.logger.warning(f"Se accedió a una ruta no encontrada: {request.path}")
    return error_json('Recurso no encontrado.', 404)

@error_bp.app_errorhandler(429)
def demasiadas_peticiones(error):
    current_app.logger.warning(f"SEGURIDAD: Límite de peticiones superado en {request.path}: {error}")
    return error_json('Demasiados intentos. Espere un momento e intente de nuevo.', 429)

@error_bp.app_errorhandler(500)
def internal_error(error):
    """
    Manejador para errores 500 (Error interno del servidor).

    Registra el traceback completo en el log y devuelve un mensaje genérico.
    """
    current_app.logger.error(f"Error interno del servidor: {error}", exc_info=True)
    return error_json('Error interno del servidor.', 500)

@error_bp.app_errorhandler(413)
def request_entity_too_large(error):
    """Manejador para errores 413: la petición supera MAX_CONTENT_LENGTH."""
    current_app.logger.warning(f"Se intentó subir un archivo demasiado grande: {error}")
    max_size_mb = current_app.config.get('MAX_CONTENT_LENGTH', 0) / (1024 * 1024)
    return error_json(f"El archivo es demasiado grande. El tamaño máximo permitido es de {max_size_mb:.0f} MB.", 413)
