# RUTA: reclutamiento/application/services/cliente_service.py

import logging
import random
import string

from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.cliente import Cliente, Usuario
from reclutamiento.domain.models.enums import PlanContratado

logger = logging.getLogger(__name__)

MIN_USUARIOS_POR_CLIENTE = 1
MAX_USUARIOS_POR_CLIENTE = 5


def generar_password():
    """Contraseña aleatoria de 6 a 8 caracteres en minúsculas y dígitos."""
    longitud = random.randint(6, 8)
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=longitud))


def _validar_datos_cliente(datos, usuarios):
    if not (datos.get('nombre') or '').strip():
        raise TransicionInvalidaError('Por favor, complete el nombre del cliente.')
    if len(usuarios) < MIN_USUARIOS_POR_CLIENTE:
        raise TransicionInvalidaError('Un cliente debe tener al menos un usuario.')
    if len(usuarios) > MAX_USUARIOS_POR_CLIENTE:
        raise TransicionInvalidaError(f'Un cliente puede tener como máximo {MAX_USUARIOS_POR_CLIENTE} usuarios.')
    for usuario in usuarios:
        if not (usuario.get('nombre') or '').strip() or not (usuario.get('email') or '').strip():
            raise TransicionInvalidaError('Complete al menos el nombre y email de cada usuario.')


def _plan(valor):
    if not valor:
        return None
    try:
        return PlanContratado(valor)
    except ValueError:
        raise TransicionInvalidaError(f"Plan contratado desconocido: {valor}")


class ClienteService:
    def __init__(self, almacen):
        self._almacen = almacen

    def _construir_usuarios(self, cliente_id, datos_usuarios):
        sin_id = [u for u in datos_usuarios if not u.get('id')]
        nuevos_ids = iter(self._almacen.nuevos_ids('user', len(sin_id))) if sin_id else iter(())
        usuarios = []
        for datos in datos_usuarios:
            usuarios.append(Usuario(
                id=datos.get('id') or next(nuevos_ids),
                nombre=datos['nombre'].strip(),
                email=datos['email'].strip(),
                password=datos.get('password') or generar_password(),
                telefono=datos.get('telefono') or '',
                cargo=datos.get('cargo') or '',
                horario_contacto=datos.get('horarioContacto') or '',
                cliente_id=cliente_id,
            ))
        return usuarios

    def crear_cliente(self, datos, datos_usuarios):
        """Crea el cliente junto con sus usuarios (entre 1 y 5). Devuelve el cliente."""
        _validar_datos_cliente(datos, datos_usuarios)
        cliente_id = self._almacen.nuevo_id('cli')
        usuarios = self._construir_usuarios(cliente_id, datos_usuarios)
        cliente = Cliente(
            id=cliente_id,
            nombre=datos['nombre'].strip(),
            usuarios=usuarios,
            proyectos_activos=[],
            logo_url=datos.get('logoUrl'),
            contacto_principal=datos.get('contactoPrincipal'),
            telefono_principal=datos.get('telefonoPrincipal'),
            email_principal=datos.get('emailPrincipal'),
            direccion=datos.get('direccion'),
            plan_contratado=_plan(datos.get('planContratado')),
        )
        self._almacen.agregar_cliente(cliente, usuarios)
        logger.info(f"Cliente {cliente_id} creado con {len(usuarios)} usuarios")
        return cliente

    def actualizar_cliente(self, cliente_id, datos, datos_usuarios):
        """Actualiza la ficha; los usuarios entregados reemplazan a los anteriores del cliente."""
        actual = self._almacen.requerir('clientes', cliente_id, 'Cliente')
        _validar_datos_cliente(datos, datos_usuarios)
        usuarios = self._construir_usuarios(cliente_id, datos_usuarios)
        cliente = actual.copiar(
            nombre=datos['nombre'].strip(),
            usuarios=usuarios,
            contacto_principal=datos.get('contactoPrincipal', actual.contacto_principal),
            telefono_principal=datos.get('telefonoPrincipal', actual.telefono_principal),
            email_principal=datos.get('emailPrincipal', actual.email_principal),
            direccion=datos.get('direccion', actual.direccion),
            plan_contratado=_plan(datos.get('planContratado')) if 'planContratado' in datos else actual.plan_contratado,
        )
        self._almacen.actualizar_cliente(cliente, usuarios)
        logger.info(f"Cliente {cliente_id} actualizado ({len(usuarios)} usuarios)")
        return cliente

    def actualizar_logo(self, cliente_id, logo):
        cliente = self._almacen.requerir('clientes', cliente_id, 'Cliente')
        actualizado = cliente.copiar(logo_url=logo or None)
        self._almacen.actualizar_cliente(actualizado)
        logger.info(f"Logo actualizado para el cliente {cliente_id}")
        return actualizado

    def actualizar_logo_plataforma(self, logo):
        self._almacen.actualizar_logo(logo or None)
        logger.info("Logo de la plataforma actualizado")

    def listar(self):
        return list(self._almacen.clientes)
