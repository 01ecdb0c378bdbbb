# RUTA: reclutamiento/domain/models/proyecto.py

import copy

from reclutamiento.domain.models.enums import CategoriaTrabajador, EstadoProyecto
from reclutamiento.domain.models.fechas import a_iso, a_fecha


class TurnoAsignado:
    def __init__(self, nombre='', horario='', cantidad=0):
        self.nombre = nombre
        self.horario = horario
        self.cantidad = cantidad

    def to_dict(self):
        return {'nombre': self.nombre, 'horario': self.horario, 'cantidad': self.cantidad}

    @classmethod
    def from_dict(cls, datos):
        return cls(
            nombre=datos.get('nombre', ''),
            horario=datos.get('horario', ''),
            cantidad=int(datos.get('cantidad') or 0),
        )

    def __repr__(self):
        return f"<TurnoAsignado {self.nombre!r} x{self.cantidad}>"


class Puesto:
    """Cupo de un cargo dentro de un proyecto, repartido en turnos."""

    def __init__(self, tipo='', categoria=CategoriaTrabajador.TECNICO, cantidad=1, sueldo=0, turnos=None):
        self.tipo = tipo
        self.categoria = categoria
        self.cantidad = cantidad
        self.sueldo = sueldo
        self.turnos = turnos if turnos is not None else []

    @property
    def total_en_turnos(self):
        return sum(turno.cantidad for turno in self.turnos)

    def to_dict(self):
        return {
            'tipo': self.tipo,
            'categoria': self.categoria.value,
            'cantidad': self.cantidad,
            'sueldo': self.sueldo,
            'turnos': [turno.to_dict() for turno in self.turnos],
        }

    @classmethod
    def from_dict(cls, datos):
        return cls(
            tipo=datos.get('tipo', ''),
            categoria=CategoriaTrabajador(datos.get('categoria', CategoriaTrabajador.TECNICO.value)),
            cantidad=int(datos.get('cantidad') or 0),
            sueldo=datos.get('sueldo') or 0,
            turnos=[TurnoAsignado.from_dict(t) for t in datos.get('turnos') or []],
        )

    def __repr__(self):
        return f"<Puesto {self.tipo!r} x{self.cantidad}>"


class Proyecto:
    def __init__(self, id=None, nombre='', cliente_id=None, cantidad_trabajadores=0, puestos=None,
                 ciudad='', fecha_inicio_reclutamiento=None, fecha_termino_reclutamiento=None,
                 fecha_inicio_trabajo=None, usuarios_asignados=None, beneficios=None,
                 estado=EstadoProyecto.BORRADOR):
        self.id = id
        self.nombre = nombre
        self.cliente_id = cliente_id
        self.cantidad_trabajadores = cantidad_trabajadores
        self.puestos = puestos if puestos is not None else []
        self.ciudad = ciudad
        self.fecha_inicio_reclutamiento = fecha_inicio_reclutamiento
        self.fecha_termino_reclutamiento = fecha_termino_reclutamiento
        self.fecha_inicio_trabajo = fecha_inicio_trabajo
        self.usuarios_asignados = usuarios_asignados if usuarios_asignados is not None else []
        self.beneficios = beneficios
        self.estado = estado

    @property
    def publicado(self):
        return self.estado == EstadoProyecto.PUBLICADO

    def total_requerido(self):
        """Suma de las cantidades de todos los puestos."""
        return sum(puesto.cantidad for puesto in self.puestos)

    def copiar(self, **cambios):
        nuevo = copy.deepcopy(self)
        for campo, valor in cambios.items():
            if not hasattr(nuevo, campo):
                raise AttributeError(f"Proyecto no tiene el atributo '{campo}'")
            setattr(nuevo, campo, valor)
        return nuevo

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'clienteId': self.cliente_id,
            'cantidadTrabajadores': self.cantidad_trabajadores,
            'puestos': [puesto.to_dict() for puesto in self.puestos],
            'ciudad': self.ciudad,
            'fechaInicioReclutamiento': a_iso(self.fecha_inicio_reclutamiento),
            'fechaTerminoReclutamiento': a_iso(self.fecha_termino_reclutamiento),
            'fechaInicioTrabajo': a_iso(self.fecha_inicio_trabajo),
            'usuariosAsignados': list(self.usuarios_asignados),
            'beneficios': self.beneficios,
            'estado': self.estado.value,
        }

    @classmethod
    def from_dict(cls, datos):
        return cls(
            id=datos.get('id'),
            nombre=datos.get('nombre', ''),
            cliente_id=datos.get('clienteId'),
            cantidad_trabajadores=int(datos.get('cantidadTrabajadores') or 0),
            puestos=[Puesto.from_dict(p) for p in datos.get('puestos') or []],
            ciudad=datos.get('ciudad', ''),
            fecha_inicio_reclutamiento=a_fecha(datos.get('fechaInicioReclutamiento')),
            fecha_termino_reclutamiento=a_fecha(datos.get('fechaTerminoReclutamiento')),
            fecha_inicio_trabajo=a_fecha(datos.get('fechaInicioTrabajo')),
            usuarios_asignados=list(datos.get('usuariosAsignados') or []),
            beneficios=datos.get('beneficios'),
            estado=EstadoProyecto(datos.get('estado', EstadoProyecto.BORRADOR.value)),
        )

    def __repr__(self):
        return f"<Proyecto {self.id} {self.nombre!r} {self.estado.value}>"
