# RUTA: reclutamiento/core/security.py
"""
Verificación de credenciales.

El contrato de la plataforma es la comparación exacta contra el secreto guardado.
Se aísla detrás de IVerificadorCredenciales para poder cambiar a contraseñas con hash
sin tocar la lógica de sesión.
"""

import hmac
import logging
from abc import ABC, abstractmethod

from werkzeug.security import check_password_hash

logger = logging.getLogger(__name__)


class IVerificadorCredenciales(ABC):
    @abstractmethod
    def verificar(self, secreto_guardado, secreto_ingresado):
        """Devuelve True si el secreto ingresado corresponde al guardado."""
        pass


class VerificadorTextoPlano(IVerificadorCredenciales):
    """Igualdad exacta contra la contraseña guardada tal cual."""

    def verificar(self, secreto_guardado, secreto_ingresado):
        if secreto_guardado is None or secreto_ingresado is None:
            return False
        # compare_digest solo acepta str ASCII; se comparan los bytes UTF-8
        return hmac.compare_digest(str(secreto_guardado).encode('utf-8'), str(secreto_ingresado).encode('utf-8'))


class VerificadorHash(IVerificadorCredenciales):
    """Para despliegues donde las contraseñas se guardan con generate_password_hash de werkzeug."""

    def verificar(self, secreto_guardado, secreto_ingresado):
        if not secreto_guardado or secreto_ingresado is None:
            return False
        try:
            return check_password_hash(secreto_guardado, secreto_ingresado)
        except ValueError:
            # El valor guardado no tiene formato de hash
            logger.warning("Se encontró una contraseña sin formato de hash al verificar credenciales.")
            return False


def crear_verificador(nombre):
    """Construye el verificador configurado en CREDENTIAL_VERIFIER."""
    if nombre in (None, '', 'texto_plano'):
        return VerificadorTextoPlano()
    if nombre == 'hash':
        return VerificadorHash()
    raise ValueError(f"Verificador de credenciales desconocido: {nombre}")
