# RUTA: reclutamiento/domain/models/cuentas.py

from datetime import datetime

from flask_login import UserMixin

from reclutamiento.domain.models.enums import Rol
from reclutamiento.domain.models.fechas import a_iso, a_datetime


class Revisor:
    """Personal interno que valida documentos y reparte candidatos."""

    def __init__(self, id=None, user_id=None, nombre='', email='', password='',
                 fecha_creacion=None, proyectos_asignados=None):
        self.id = id
        self.user_id = user_id
        self.nombre = nombre
        self.email = email
        self.password = password
        self.fecha_creacion = fecha_creacion or datetime.now()
        self.proyectos_asignados = proyectos_asignados if proyectos_asignados is not None else []

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'nombre': self.nombre,
            'email': self.email,
            'password': self.password,
            'fechaCreacion': a_iso(self.fecha_creacion),
            'proyectosAsignados': list(self.proyectos_asignados),
        }

    @classmethod
    def from_dict(cls, datos):
        return cls(
            id=datos.get('id'),
            user_id=datos.get('userId'),
            nombre=datos.get('nombre', ''),
            email=datos.get('email', ''),
            password=datos.get('password', ''),
            fecha_creacion=a_datetime(datos.get('fechaCreacion')),
            proyectos_asignados=list(datos.get('proyectosAsignados') or []),
        )

    def __repr__(self):
        return f"<Revisor {self.id} {self.nombre!r}>"


class Admin:
    def __init__(self, id=None, nombre='', email='', password=''):
        self.id = id
        self.nombre = nombre
        self.email = email
        self.password = password

    def to_dict(self):
        return {'id': self.id, 'nombre': self.nombre, 'email': self.email, 'password': self.password}

    @classmethod
    def from_dict(cls, datos):
        return cls(
            id=datos.get('id'),
            nombre=datos.get('nombre', ''),
            email=datos.get('email', ''),
            password=datos.get('password', ''),
        )

    def __repr__(self):
        return f"<Admin {self.id}>"


class UsuarioSesion(UserMixin):
    """
    Usuario autenticado: la cuenta encontrada más el rol con el que inició sesión.
    Flask-Login lo identifica como "<rol>:<id>" para que el mismo ID en
    colecciones distintas no se confunda.
    """

    def __init__(self, cuenta, rol):
        self.cuenta = cuenta
        self.rol = rol

    @property
    def id(self):
        return self.cuenta.id

    @property
    def nombre(self):
        return getattr(self.cuenta, 'nombre', None) or self.cuenta.email

    @property
    def email(self):
        return self.cuenta.email

    @property
    def cliente_id(self):
        return getattr(self.cuenta, 'cliente_id', None)

    def get_id(self):
        return f"{self.rol.slug}:{self.cuenta.id}"

    def to_dict(self):
        datos = self.cuenta.to_dict()
        datos.pop('password', None)
        datos['role'] = self.rol.value
        return datos

    def __repr__(self):
        return f"<UsuarioSesion {self.get_id()}>"


def parsear_id_sesion(id_sesion):
    """Separa un identificador "<rol>:<id>" en (Rol, id). Lanza ValueError si el formato no es válido."""
    slug, separador, cuenta_id = (id_sesion or '').partition(':')
    if not separador or not cuenta_id:
        raise ValueError(f"Identificador de sesión inválido: {id_sesion!r}")
    return Rol.desde_slug(slug), cuenta_id
