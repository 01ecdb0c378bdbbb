# RUTA: reclutamiento/domain/models/trabajador.py

import copy
from datetime import datetime

from reclutamiento.domain.models.enums import EstadoDocumental, EstadoCliente, ProximoEscenario
from reclutamiento.domain.models.fechas import a_iso, a_fecha, a_datetime


def _enum_o_none(enum_cls, valor):
    if valor is None or valor == '':
        return None
    return enum_cls(valor)


class Trabajador:
    """
    Candidato del proceso de reclutamiento.

    El estado documental (revisión de antecedentes) es independiente de la etapa
    del proceso con el cliente (estado_cliente / proximo_escenario), que solo
    existe mientras el trabajador tiene un proyecto asignado.
    """

    def __init__(self, id=None, numero=0, nombre='', especialidad='', edad=0, rut='',
                 ciudad='', nacionalidad='', telefono=None, fecha_nacimiento=None,
                 estado_documental=EstadoDocumental.EN_REVISION, fecha_registro=None,
                 proyecto_asignado=None, ultimo_proyecto_asignado=None, disponible=None,
                 ultima_accion=None, estado_cliente=None, proximo_escenario=None,
                 motivo_rechazo=None, motivo_rechazo_documental=None,
                 revisor_asignado_id=None, documentos=None, es_prueba=False):
        self.id = id
        self.numero = numero
        self.nombre = nombre
        self.especialidad = especialidad
        self.edad = edad
        self.rut = rut
        self.ciudad = ciudad
        self.nacionalidad = nacionalidad
        self.telefono = telefono
        self.fecha_nacimiento = fecha_nacimiento
        self.estado_documental = estado_documental
        self.fecha_registro = fecha_registro or datetime.now()
        self.proyecto_asignado = proyecto_asignado
        self.ultimo_proyecto_asignado = ultimo_proyecto_asignado
        self.disponible = disponible
        self.ultima_accion = ultima_accion
        self.estado_cliente = estado_cliente
        self.proximo_escenario = proximo_escenario
        self.motivo_rechazo = motivo_rechazo
        self.motivo_rechazo_documental = motivo_rechazo_documental
        self.revisor_asignado_id = revisor_asignado_id
        self.documentos = documentos if documentos is not None else {}
        self.es_prueba = es_prueba

    def copiar(self, **cambios):
        """Devuelve una copia independiente con los atributos indicados reemplazados."""
        nuevo = copy.deepcopy(self)
        for campo, valor in cambios.items():
            if not hasattr(nuevo, campo):
                raise AttributeError(f"Trabajador no tiene el atributo '{campo}'")
            setattr(nuevo, campo, valor)
        return nuevo

    @property
    def en_pool_libre(self):
        return self.estado_documental == EstadoDocumental.VALIDADO and not self.proyecto_asignado

    def to_dict(self):
        return {
            'id': self.id,
            'numero': self.numero,
            'nombre': self.nombre,
            'especialidad': self.especialidad,
            'edad': self.edad,
            'rut': self.rut,
            'ciudad': self.ciudad,
            'nacionalidad': self.nacionalidad,
            'telefono': self.telefono,
            'fechaNacimiento': a_iso(self.fecha_nacimiento),
            'estadoDocumental': self.estado_documental.value,
            'fechaRegistro': a_iso(self.fecha_registro),
            'proyectoAsignado': self.proyecto_asignado,
            'ultimoProyectoAsignado': self.ultimo_proyecto_asignado,
            'disponible': self.disponible,
            'ultimaAccion': self.ultima_accion,
            'estadoCliente': self.estado_cliente.value if self.estado_cliente else None,
            'proximoEscenario': self.proximo_escenario.value if self.proximo_escenario else None,
            'motivoRechazo': self.motivo_rechazo,
            'motivoRechazoDocumental': self.motivo_rechazo_documental,
            'revisorAsignadoId': self.revisor_asignado_id,
            'documentos': dict(self.documentos),
            'esPrueba': self.es_prueba,
        }

    @classmethod
    def from_dict(cls, datos):
        return cls(
            id=datos.get('id'),
            numero=datos.get('numero', 0),
            nombre=datos.get('nombre', ''),
            especialidad=datos.get('especialidad', ''),
            edad=datos.get('edad', 0),
            rut=datos.get('rut', ''),
            ciudad=datos.get('ciudad', ''),
            nacionalidad=datos.get('nacionalidad', ''),
            telefono=datos.get('telefono'),
            fecha_nacimiento=a_fecha(datos.get('fechaNacimiento')),
            estado_documental=EstadoDocumental(datos.get('estadoDocumental', EstadoDocumental.EN_REVISION.value)),
            fecha_registro=a_datetime(datos.get('fechaRegistro')),
            proyecto_asignado=datos.get('proyectoAsignado'),
            ultimo_proyecto_asignado=datos.get('ultimoProyectoAsignado'),
            disponible=datos.get('disponible'),
            ultima_accion=datos.get('ultimaAccion'),
            estado_cliente=_enum_o_none(EstadoCliente, datos.get('estadoCliente')),
            proximo_escenario=_enum_o_none(ProximoEscenario, datos.get('proximoEscenario')),
            motivo_rechazo=datos.get('motivoRechazo'),
            motivo_rechazo_documental=datos.get('motivoRechazoDocumental'),
            revisor_asignado_id=datos.get('revisorAsignadoId'),
            documentos=datos.get('documentos') or {},
            es_prueba=bool(datos.get('esPrueba', False)),
        )

    def __repr__(self):
        return f"<Trabajador {self.id} {self.nombre!r} {self.estado_documental.value}>"


class TrabajadorCredencial:
    """Cuenta de acceso del trabajador. Comparte el ID con su perfil."""

    def __init__(self, id, email, password):
        self.id = id
        self.email = email
        self.password = password

    def copiar(self, **cambios):
        datos = {'id': self.id, 'email': self.email, 'password': self.password}
        datos.update(cambios)
        return TrabajadorCredencial(**datos)

    def to_dict(self):
        return {'id': self.id, 'email': self.email, 'password': self.password}

    @classmethod
    def from_dict(cls, datos):
        return cls(id=datos['id'], email=datos.get('email', ''), password=datos.get('password', ''))

    def __repr__(self):
        return f"<TrabajadorCredencial {self.id} {self.email}>"
