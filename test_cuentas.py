"""Pruebas de clientes, revisores y cuentas de trabajadores."""

import json
from datetime import date

import pytest

from reclutamiento.application.services.cliente_service import ClienteService, generar_password
from reclutamiento.application.services.cuentas_service import CuentasService, normalizar_telefono
from reclutamiento.application.services.respaldo_service import RespaldoService
from reclutamiento.domain.exceptions import EntidadNoEncontradaError, TransicionInvalidaError
from reclutamiento.domain.models.enums import EstadoDocumental, PlanContratado, Rol


def _usuarios(cantidad):
    return [{'nombre': f'Usuario {i}', 'email': f'usuario{i}@cliente.cl'} for i in range(cantidad)]


# ===== CLIENTES =====

def test_generar_password():
    for _ in range(20):
        password = generar_password()
        assert 6 <= len(password) <= 8
        assert password.isalnum() and password == password.lower()


@pytest.mark.parametrize('cantidad', [0, 6])
def test_cliente_requiere_entre_uno_y_cinco_usuarios(almacen_demo, cantidad):
    with pytest.raises(TransicionInvalidaError):
        ClienteService(almacen_demo).crear_cliente({'nombre': 'Minera ABC'}, _usuarios(cantidad))


def test_crear_cliente_con_usuarios(almacen_demo):
    cliente = ClienteService(almacen_demo).crear_cliente(
        {'nombre': 'Minera ABC', 'planContratado': 'Mensual'}, _usuarios(2)
    )
    assert cliente.plan_contratado == PlanContratado.MENSUAL
    usuarios = [u for u in almacen_demo.usuarios if u.cliente_id == cliente.id]
    assert len(usuarios) == 2
    assert all(u.password for u in usuarios)
    assert len({u.id for u in usuarios}) == 2


def test_actualizar_cliente_reemplaza_usuarios(almacen_demo):
    servicio = ClienteService(almacen_demo)
    cliente = servicio.crear_cliente({'nombre': 'Minera ABC'}, _usuarios(3))
    servicio.actualizar_cliente(cliente.id, {'nombre': 'Minera ABC Ltda.'}, _usuarios(1))
    assert almacen_demo.obtener_cliente(cliente.id).nombre == 'Minera ABC Ltda.'
    assert len([u for u in almacen_demo.usuarios if u.cliente_id == cliente.id]) == 1
    # Los usuarios de otros clientes no se tocan
    assert almacen_demo.obtener_usuario('user-1') is not None


def test_logos(almacen_demo):
    servicio = ClienteService(almacen_demo)
    servicio.actualizar_logo('cli-1', 'data:image/png;base64,AAAA')
    servicio.actualizar_logo_plataforma('data:image/png;base64,BBBB')
    assert almacen_demo.obtener_cliente('cli-1').logo_url == 'data:image/png;base64,AAAA'
    assert almacen_demo.platform_logo == 'data:image/png;base64,BBBB'
    with pytest.raises(EntidadNoEncontradaError):
        servicio.actualizar_logo('cli-nada', None)


# ===== REVISORES =====

def test_crear_y_actualizar_revisor(almacen_demo):
    servicio = CuentasService(almacen_demo)
    revisor = servicio.crear_revisor('Paula Vega', 'paula@plataforma.cl')
    assert revisor.user_id == f"user-{revisor.id}"
    assert revisor.password
    actualizado = servicio.actualizar_revisor(revisor.id, nombre='Paula Vega R.')
    assert actualizado.email == 'paula@plataforma.cl'
    assert almacen_demo.obtener_revisor(revisor.id).nombre == 'Paula Vega R.'


# ===== TRABAJADORES =====

def test_normalizar_telefono():
    assert normalizar_telefono('1234 5678') == '+56912345678'
    assert normalizar_telefono('+56987654321') == '+56987654321'
    assert normalizar_telefono('') is None


def test_registro_y_perfil_de_trabajador(almacen_demo):
    servicio = CuentasService(almacen_demo)
    trabajador = servicio.registrar_cuenta_trabajador('nuevo@correo.cl', 'secreto')
    assert trabajador.estado_documental == EstadoDocumental.EN_REVISION
    assert trabajador.numero == 11
    assert almacen_demo.obtener_credencial(trabajador.id).email == 'nuevo@correo.cl'

    perfil = servicio.completar_perfil(trabajador.id, {
        'nombreCompleto': 'Nuevo Trabajador',
        'rut': '20.123.456-7',
        'telefono': '12345678',
        'fechaNacimiento': '1995-03-10',
        'ciudad': 'Calama',
        'nacionalidad': 'Chilena',
        'especialidad': 'Otro',
        'otraEspecialidad': 'Topógrafo',
        'documentos': {'cv': 'data:x', 'desconocido': 'data:y'},
    }, hoy=date(2025, 1, 1))
    assert perfil.nombre == 'Nuevo Trabajador'
    assert perfil.especialidad == 'Topógrafo'
    assert perfil.edad == 30
    assert perfil.telefono == '+56912345678'
    assert set(perfil.documentos) == {'cv'}


def test_registro_con_email_repetido_falla(almacen_demo):
    with pytest.raises(TransicionInvalidaError):
        CuentasService(almacen_demo).registrar_cuenta_trabajador('Carlos.Soto@email.com', 'x')


def test_credenciales_de_trabajador(almacen_demo):
    servicio = CuentasService(almacen_demo)
    with pytest.raises(TransicionInvalidaError):
        servicio.actualizar_credencial('trab-1', email='luis.morales@email.com')
    servicio.actualizar_credencial('trab-1', password='nueva')
    assert almacen_demo.obtener_credencial('trab-1').password == 'nueva'

    servicio.eliminar_cuenta_trabajador('trab-1')
    assert almacen_demo.obtener_trabajador('trab-1') is None
    assert almacen_demo.obtener_credencial('trab-1') is None
    assert not almacen_demo.email_registrado('carlos.soto@email.com', Rol.TRABAJADOR)


def test_listar_credenciales_incluye_nombre(almacen_demo):
    filas = {f['id']: f for f in CuentasService(almacen_demo).listar_credenciales()}
    assert filas['trab-1']['nombre'] == 'Carlos Soto'
    assert filas['trab-1']['email'] == 'carlos.soto@email.com'


# ===== RESPALDO =====

def test_respaldo_contiene_todas_las_colecciones(almacen_demo):
    nombre, contenido = RespaldoService(almacen_demo).generar_respaldo(date(2024, 8, 5))
    assert nombre == 'respaldo_plataforma_reclutamiento_2024-08-05.json'
    snapshot = json.loads(contenido.getvalue().decode('utf-8'))
    assert set(snapshot) == {
        'trabajadores', 'clientes', 'usuarios', 'proyectos', 'credencialesTrabajadores',
        'revisores', 'admins', 'platformLogo',
    }
    assert len(snapshot['trabajadores']) == 10
