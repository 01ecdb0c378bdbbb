# RUTA: reclutamiento/application/services/sesion_service.py

import logging

from reclutamiento.domain.models.cuentas import UsuarioSesion, parsear_id_sesion
from reclutamiento.domain.models.enums import Rol

# Configura un logger para este módulo
logger = logging.getLogger(__name__)


def ruta_dashboard(rol):
    return f"/{rol.slug}"


def ruta_login(rol):
    return f"/{rol.slug}/login"


def resolver_acceso(usuario_actual, rol_requerido):
    """
    Decide si el usuario puede entrar a una sección del rol indicado.

    Returns:
        None si el acceso está permitido; en otro caso, la ruta a la que se le redirige:
        el login del rol requerido si no hay sesión, o su propio panel si el rol no coincide.
    """
    if usuario_actual is None or not getattr(usuario_actual, 'is_authenticated', False):
        return ruta_login(rol_requerido)
    if usuario_actual.rol == rol_requerido:
        return None
    return ruta_dashboard(usuario_actual.rol)


class SesionService:
    def __init__(self, almacen, verificador):
        self._almacen = almacen
        self._verificador = verificador

    def login(self, email, password, rol):
        """
        Busca la cuenta solo en la colección del rol indicado.
        Devuelve un UsuarioSesion si email y contraseña coinciden, o None.
        """
        for cuenta in self._almacen.cuentas_por_rol(rol):
            if cuenta.email == email and self._verificador.verificar(cuenta.password, password):
                logger.info(f"Inicio de sesión correcto: {email} como {rol.value}")
                return UsuarioSesion(cuenta, rol)
        logger.warning(f"SEGURIDAD: Intento fallido de login como {rol.value}: {email}")
        return None

    def cargar_sesion(self, id_sesion):
        """Reconstruye el usuario de sesión a partir del ID guardado por Flask-Login."""
        try:
            rol, cuenta_id = parsear_id_sesion(id_sesion)
        except ValueError as e:
            logger.warning(f"Sesión descartada: {e}")
            return None
        cuenta = next((c for c in self._almacen.cuentas_por_rol(rol) if c.id == cuenta_id), None)
        if cuenta is None:
            return None
        return UsuarioSesion(cuenta, rol)

    def proyectos_visibles(self, usuario_actual):
        """
        Proyectos que cada rol puede consultar: el administrador todos, el revisor los
        publicados y el usuario del cliente los publicados de su empresa.
        """
        proyectos = self._almacen.proyectos
        if usuario_actual.rol == Rol.ADMIN:
            return list(proyectos)
        elif usuario_actual.rol == Rol.REVISOR:
            return [p for p in proyectos if p.publicado]
        elif usuario_actual.rol == Rol.USUARIO:
            cliente = self._almacen.obtener_cliente(usuario_actual.cliente_id)
            if cliente is None:
                return []
            activos = set(cliente.proyectos_activos)
            return [p for p in proyectos if p.id in activos and p.publicado]
        elif usuario_actual.rol == Rol.TRABAJADOR:
            return []
        raise ValueError(f"Rol desconocido: {usuario_actual.rol!r}")

    def puede_ver_proyecto(self, usuario_actual, proyecto_id):
        return any(p.id == proyecto_id for p in self.proyectos_visibles(usuario_actual))
