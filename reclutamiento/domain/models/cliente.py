# RUTA: reclutamiento/domain/models/cliente.py

import copy

from reclutamiento.domain.models.enums import PlanContratado


class Usuario:
    """Usuario del cliente: revisa y avanza a los candidatos de los proyectos de su empresa."""

    def __init__(self, id=None, nombre='', email='', password='', telefono='', cargo='',
                 horario_contacto='', cliente_id=None):
        self.id = id
        self.nombre = nombre
        self.email = email
        self.password = password
        self.telefono = telefono
        self.cargo = cargo
        self.horario_contacto = horario_contacto
        self.cliente_id = cliente_id

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'email': self.email,
            'password': self.password,
            'telefono': self.telefono,
            'cargo': self.cargo,
            'horarioContacto': self.horario_contacto,
            'clienteId': self.cliente_id,
        }

    @classmethod
    def from_dict(cls, datos):
        return cls(
            id=datos.get('id'),
            nombre=datos.get('nombre', ''),
            email=datos.get('email', ''),
            password=datos.get('password', ''),
            telefono=datos.get('telefono', ''),
            cargo=datos.get('cargo', ''),
            horario_contacto=datos.get('horarioContacto', ''),
            cliente_id=datos.get('clienteId'),
        )

    def __repr__(self):
        return f"<Usuario {self.id} {self.email}>"


class Cliente:
    def __init__(self, id=None, nombre='', usuarios=None, proyectos_activos=None, logo_url=None,
                 contacto_principal=None, telefono_principal=None, email_principal=None,
                 direccion=None, plan_contratado=None):
        self.id = id
        self.nombre = nombre
        self.usuarios = usuarios if usuarios is not None else []
        self.proyectos_activos = proyectos_activos if proyectos_activos is not None else []
        self.logo_url = logo_url
        self.contacto_principal = contacto_principal
        self.telefono_principal = telefono_principal
        self.email_principal = email_principal
        self.direccion = direccion
        self.plan_contratado = plan_contratado

    def copiar(self, **cambios):
        nuevo = copy.deepcopy(self)
        for campo, valor in cambios.items():
            if not hasattr(nuevo, campo):
                raise AttributeError(f"Cliente no tiene el atributo '{campo}'")
            setattr(nuevo, campo, valor)
        return nuevo

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'usuarios': [u.to_dict() for u in self.usuarios],
            'proyectosActivos': list(self.proyectos_activos),
            'logoUrl': self.logo_url,
            'contactoPrincipal': self.contacto_principal,
            'telefonoPrincipal': self.telefono_principal,
            'emailPrincipal': self.email_principal,
            'direccion': self.direccion,
            'planContratado': self.plan_contratado.value if self.plan_contratado else None,
        }

    @classmethod
    def from_dict(cls, datos):
        plan = datos.get('planContratado')
        return cls(
            id=datos.get('id'),
            nombre=datos.get('nombre', ''),
            usuarios=[Usuario.from_dict(u) for u in datos.get('usuarios') or []],
            proyectos_activos=list(datos.get('proyectosActivos') or []),
            logo_url=datos.get('logoUrl'),
            contacto_principal=datos.get('contactoPrincipal'),
            telefono_principal=datos.get('telefonoPrincipal'),
            email_principal=datos.get('emailPrincipal'),
            direccion=datos.get('direccion'),
            plan_contratado=PlanContratado(plan) if plan else None,
        )

    def __repr__(self):
        return f"<Cliente {self.id} {self.nombre!r}>"
