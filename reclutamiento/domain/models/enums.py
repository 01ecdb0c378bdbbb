# RUTA: reclutamiento/domain/models/enums.py

from enum import Enum


class Rol(str, Enum):
    """Roles de acceso de la plataforma. El valor es el texto que se muestra y se persiste."""
    ADMIN = 'Administrador'
    REVISOR = 'Revisor'
    USUARIO = 'Usuario'
    TRABAJADOR = 'Trabajador'

    @property
    def slug(self):
        """Segmento de URL asociado al rol (/admin, /revisor, ...)."""
        if self is Rol.ADMIN:
            return 'admin'
        elif self is Rol.REVISOR:
            return 'revisor'
        elif self is Rol.USUARIO:
            return 'usuario'
        elif self is Rol.TRABAJADOR:
            return 'trabajador'
        raise ValueError(f"Rol sin ruta asociada: {self!r}")

    @classmethod
    def desde_slug(cls, slug):
        for rol in cls:
            if rol.slug == slug:
                return rol
        raise ValueError(f"Rol desconocido: {slug}")


class EstadoDocumental(str, Enum):
    EN_REVISION = 'En revisión documental'
    VALIDADO = 'Validado'
    ASIGNADO = 'Asignado a proyecto'
    RECHAZADO_DOCUMENTAL = 'Rechazado Documental'


class EstadoCliente(str, Enum):
    APROBADO = 'Aprobado por el cliente'
    RECHAZADO = 'Rechazado por el cliente'
    PENDIENTE = 'Pendiente de acción'


class ProximoEscenario(str, Enum):
    """Etapas del proceso de selección que gestiona el cliente, en orden."""
    INGRESO = 'Ingresos validados'
    ENTREVISTA = 'En entrevista'
    EVALUACION = 'En evaluación'
    APROBADO_PARA_CONTRATAR = 'Aprobado para Contratar'
    CARPETA_SOLICITADA = 'Carpeta Solicitada'
    ACREDITACION = 'A acreditar'
    CONTRATADO = 'Contratado'


class CategoriaTrabajador(str, Enum):
    TECNICO = 'Técnico'
    TECNICO_CALIFICADO = 'Técnico Calificado'
    PROFESIONAL = 'Profesional'


class EstadoProyecto(str, Enum):
    BORRADOR = 'borrador'
    PUBLICADO = 'publicado'


class PlanContratado(str, Enum):
    POR_PROYECTO = 'Por Proyecto'
    MENSUAL = 'Mensual'
    PERSONALIZADO = 'Personalizado'
