# RUTA: reclutamiento/infrastructure/persistence/datos_iniciales.py
"""
Datos de demostración que se cargan cuando todavía no existe una instantánea guardada.
"""

from datetime import date, datetime

from reclutamiento.domain.models.cliente import Cliente, Usuario
from reclutamiento.domain.models.cuentas import Admin, Revisor
from reclutamiento.domain.models.enums import (
    CategoriaTrabajador, EstadoCliente, EstadoDocumental, EstadoProyecto, PlanContratado, ProximoEscenario
)
from reclutamiento.domain.models.proyecto import Proyecto, Puesto, TurnoAsignado
from reclutamiento.domain.models.trabajador import Trabajador, TrabajadorCredencial

PASSWORD_DEMO = '1234'


def _trabajadores():
    validado = EstadoDocumental.VALIDADO
    asignado = EstadoDocumental.ASIGNADO
    return [
        Trabajador(id='trab-1', numero=1, nombre='Carlos Soto', especialidad='Soldador', edad=35,
                   rut='15.123.456-7', ciudad='Antofagasta', nacionalidad='Chilena', telefono='+56911111111',
                   fecha_nacimiento=date(1989, 1, 1), estado_documental=EstadoDocumental.EN_REVISION,
                   fecha_registro=datetime(2024, 7, 22), revisor_asignado_id='rev-1'),
        Trabajador(id='trab-2', numero=2, nombre='Luis Morales', especialidad='Eléctrico Industrial', edad=42,
                   rut='13.987.654-K', ciudad='Calama', nacionalidad='Chilena', telefono='+56922222222',
                   fecha_nacimiento=date(1982, 2, 2), estado_documental=validado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.INGRESO,
                   fecha_registro=datetime(2024, 7, 23)),
        Trabajador(id='trab-3', numero=3, nombre='Pedro Pascal', especialidad='Operador de Maquinaria', edad=28,
                   rut='18.456.789-1', ciudad='Santiago', nacionalidad='Chilena', telefono='+56933333333',
                   fecha_nacimiento=date(1996, 3, 3), estado_documental=asignado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.APROBADO, proximo_escenario=ProximoEscenario.CONTRATADO,
                   fecha_registro=datetime(2024, 7, 15)),
        Trabajador(id='trab-4', numero=4, nombre='Maria Rojas', especialidad='Soldador', edad=31,
                   rut='17.111.222-3', ciudad='Copiapó', nacionalidad='Peruana', telefono='+56944444444',
                   fecha_nacimiento=date(1993, 4, 4), estado_documental=validado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.APROBADO, proximo_escenario=ProximoEscenario.EVALUACION,
                   fecha_registro=datetime(2024, 7, 16)),
        Trabajador(id='trab-5', numero=5, nombre='Jose Fernandez', especialidad='Mecánico de Mantenimiento',
                   edad=51, rut='10.333.444-5', ciudad='Iquique', nacionalidad='Boliviana',
                   telefono='+56955555555', fecha_nacimiento=date(1973, 5, 5), estado_documental=validado,
                   estado_cliente=EstadoCliente.RECHAZADO, motivo_rechazo='Rechazado por entrevista',
                   disponible=True, ultimo_proyecto_asignado='pro-1', fecha_registro=datetime(2024, 7, 17)),
        Trabajador(id='trab-6', numero=6, nombre='Ana Torres', especialidad='Supervisor de Obra', edad=39,
                   rut='14.555.666-7', ciudad='Concepción', nacionalidad='Chilena', telefono='+56966666666',
                   fecha_nacimiento=date(1985, 6, 6), estado_documental=EstadoDocumental.EN_REVISION,
                   fecha_registro=datetime(2024, 7, 8), revisor_asignado_id='rev-2'),
        Trabajador(id='trab-7', numero=7, nombre='Diego Rivera', especialidad='Operador de Maquinaria', edad=25,
                   rut='19.888.999-0', ciudad='Antofagasta', nacionalidad='Venezolana', telefono='+56977777777',
                   fecha_nacimiento=date(1999, 7, 7), estado_documental=asignado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.APROBADO,
                   proximo_escenario=ProximoEscenario.APROBADO_PARA_CONTRATAR,
                   fecha_registro=datetime(2024, 7, 9)),
        Trabajador(id='trab-8', numero=8, nombre='Sofia Castro', especialidad='Eléctrico Industrial', edad=33,
                   rut='16.222.333-4', ciudad='Santiago', nacionalidad='Colombiana', telefono='+56988888888',
                   fecha_nacimiento=date(1991, 8, 8), estado_documental=validado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.INGRESO,
                   fecha_registro=datetime(2024, 7, 1)),
        Trabajador(id='trab-9', numero=9, nombre='Roberto Carlos', especialidad='Soldador', edad=45,
                   rut='12.444.555-6', ciudad='Calama', nacionalidad='Chilena', telefono='+56999999999',
                   fecha_nacimiento=date(1979, 9, 9), estado_documental=validado, disponible=True,
                   fecha_registro=datetime(2024, 7, 2)),
        Trabajador(id='trab-10', numero=10, nombre='Laura Pausini', especialidad='Operador de Maquinaria', edad=30,
                   rut='17.777.888-9', ciudad='Calama', nacionalidad='Chilena', telefono='+56910101010',
                   fecha_nacimiento=date(1994, 10, 10), estado_documental=asignado, proyecto_asignado='pro-1',
                   estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.INGRESO,
                   fecha_registro=datetime(2024, 7, 3)),
    ]


def email_demo(nombre):
    """'Carlos Soto' -> 'carlos.soto@email.com'"""
    partes = nombre.lower().split()
    return f"{partes[0]}.{partes[1]}@email.com"


def generar_datos_iniciales():
    """Instantánea completa con el conjunto de demostración."""
    usuario = Usuario(id='user-1', nombre='Juan Pérez', email='mail@mail.com', password=PASSWORD_DEMO,
                      telefono='+56987654321', cargo='Jefe de RRHH', horario_contacto='L-V 9-17h',
                      cliente_id='cli-1')
    cliente = Cliente(id='cli-1', nombre='Constructora XYZ', usuarios=[usuario], proyectos_activos=['pro-1'],
                      contacto_principal='Juan Pérez', telefono_principal='+56987654321',
                      email_principal='mail@mail.com', direccion='Av. Principal 123, Antofagasta',
                      plan_contratado=PlanContratado.POR_PROYECTO)
    proyecto = Proyecto(
        id='pro-1', nombre='Ampliación Planta Norte', cliente_id='cli-1', cantidad_trabajadores=500,
        puestos=[
            Puesto(tipo='Soldador', categoria=CategoriaTrabajador.TECNICO_CALIFICADO, cantidad=250, sueldo=850000,
                   turnos=[TurnoAsignado('Turno A', '08:00 - 17:00', 250)]),
            Puesto(tipo='Eléctrico Industrial', categoria=CategoriaTrabajador.TECNICO, cantidad=250, sueldo=950000,
                   turnos=[TurnoAsignado('Turno B', '17:00 - 02:00', 250)]),
        ],
        ciudad='Antofagasta',
        fecha_inicio_reclutamiento=date(2024, 7, 1),
        fecha_termino_reclutamiento=date(2024, 8, 31),
        fecha_inicio_trabajo=date(2024, 9, 1),
        usuarios_asignados=['user-1'],
        beneficios='Seguro complementario de salud, bono de movilización.',
        estado=EstadoProyecto.PUBLICADO,
    )
    revisores = [
        Revisor(id='rev-1', user_id='user-rev-1', nombre='Elena Castillo', email='mail@mail.com',
                password=PASSWORD_DEMO, fecha_creacion=datetime(2024, 7, 20)),
        Revisor(id='rev-2', user_id='user-rev-2', nombre='Marco Díaz', email='marco.d@paradadeplanta.cl',
                password=PASSWORD_DEMO, fecha_creacion=datetime(2024, 7, 21)),
    ]
    admins = [Admin(id='admin-1', nombre='Admin General', email='mail@mail.com', password=PASSWORD_DEMO)]
    trabajadores = _trabajadores()
    credenciales = [TrabajadorCredencial(t.id, email_demo(t.nombre), PASSWORD_DEMO) for t in trabajadores]

    return {
        'trabajadores': [t.to_dict() for t in trabajadores],
        'clientes': [cliente.to_dict()],
        'usuarios': [usuario.to_dict()],
        'proyectos': [proyecto.to_dict()],
        'credencialesTrabajadores': [c.to_dict() for c in credenciales],
        'revisores': [r.to_dict() for r in revisores],
        'admins': [a.to_dict() for a in admins],
        'platformLogo': None,
    }
