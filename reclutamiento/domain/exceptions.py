# RUTA: reclutamiento/domain/exceptions.py


class ReclutamientoError(Exception):
    """Error base del dominio de reclutamiento."""


class TransicionInvalidaError(ReclutamientoError, ValueError):
    """
    Se lanza cuando una operación no cumple sus precondiciones
    (trabajador en un estado incorrecto, motivo vacío, proyecto no publicable...).
    El mensaje está pensado para mostrarse directamente al usuario.
    """


class EntidadNoEncontradaError(ReclutamientoError, LookupError):
    """El identificador sobre el que se quiere operar no existe."""

    def __init__(self, tipo, entidad_id):
        self.tipo = tipo
        self.entidad_id = entidad_id
        super().__init__(f"{tipo} con ID '{entidad_id}' no encontrado.")
