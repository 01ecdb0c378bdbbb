# RUTA: reclutamiento/application/services/cuentas_service.py
"""
Cuentas de revisores y de trabajadores (registro, perfil y credenciales).
"""

import logging

from reclutamiento.application.services.cliente_service import generar_password
from reclutamiento.application.services.importacion_service import calcular_edad
from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.catalogos import DOCUMENTOS_IMPORTACION
from reclutamiento.domain.models.cuentas import Revisor
from reclutamiento.domain.models.enums import EstadoDocumental, Rol
from reclutamiento.domain.models.fechas import a_fecha_o_none
from reclutamiento.domain.models.trabajador import Trabajador, TrabajadorCredencial

logger = logging.getLogger(__name__)


def normalizar_telefono(telefono):
    """Los teléfonos se ingresan sin prefijo; se guarda el formato móvil chileno +569."""
    telefono = (telefono or '').replace(' ', '')
    if not telefono:
        return None
    if telefono.startswith('+'):
        return telefono
    return f"+569{telefono}"


class CuentasService:
    def __init__(self, almacen):
        self._almacen = almacen

    # ===== REVISORES =====

    def crear_revisor(self, nombre, email, password=None):
        if not (nombre or '').strip() or not (email or '').strip():
            raise TransicionInvalidaError('Por favor, complete todos los campos.')
        revisor_id = self._almacen.nuevo_id('rev')
        revisor = Revisor(
            id=revisor_id,
            user_id=f"user-{revisor_id}",
            nombre=nombre.strip(),
            email=email.strip(),
            password=password or generar_password(),
            proyectos_asignados=[],
        )
        self._almacen.agregar_revisor(revisor)
        logger.info(f"Revisor {revisor.id} creado")
        return revisor

    def actualizar_revisor(self, revisor_id, nombre=None, email=None, password=None, proyectos_asignados=None):
        actual = self._almacen.requerir('revisores', revisor_id, 'Revisor')
        actualizado = Revisor(
            id=actual.id,
            user_id=actual.user_id,
            nombre=(nombre or actual.nombre).strip(),
            email=(email or actual.email).strip(),
            password=password or actual.password,
            fecha_creacion=actual.fecha_creacion,
            proyectos_asignados=list(proyectos_asignados) if proyectos_asignados is not None
            else list(actual.proyectos_asignados),
        )
        self._almacen.actualizar_revisor(actualizado)
        logger.info(f"Revisor {revisor_id} actualizado")
        return actualizado

    def eliminar_revisor(self, revisor_id):
        afectados = sum(1 for t in self._almacen.trabajadores if t.revisor_asignado_id == revisor_id)
        self._almacen.eliminar_revisor(revisor_id)
        logger.info(f"Revisor {revisor_id} eliminado; {afectados} trabajadores quedan sin revisor")
        return afectados

    # ===== TRABAJADORES =====

    def registrar_cuenta_trabajador(self, email, password):
        """
        Crea la credencial y un perfil provisional en revisión documental.
        El perfil se completa después con completar_perfil().
        """
        email = (email or '').strip()
        if not email or not password:
            raise TransicionInvalidaError('Debe indicar email y contraseña.')
        if self._almacen.email_registrado(email, Rol.TRABAJADOR):
            raise TransicionInvalidaError('Ya existe una cuenta registrada con este email.')

        trabajador_id = self._almacen.nuevo_id('trab')
        credencial = TrabajadorCredencial(trabajador_id, email, password)
        trabajador = Trabajador(
            id=trabajador_id,
            numero=len(self._almacen.trabajadores) + 1,
            nombre=email,
            estado_documental=EstadoDocumental.EN_REVISION,
        )
        self._almacen.agregar_credencial(credencial)
        self._almacen.agregar_trabajadores([trabajador])
        logger.info(f"Cuenta de trabajador {trabajador_id} registrada")
        return trabajador

    def completar_perfil(self, trabajador_id, datos, hoy=None):
        actual = self._almacen.requerir('trabajadores', trabajador_id, 'Trabajador')
        especialidad = datos.get('especialidad') or ''
        if especialidad == 'Otro':
            especialidad = (datos.get('otraEspecialidad') or '').strip() or especialidad
        documentos = dict(actual.documentos)
        for clave, valor in (datos.get('documentos') or {}).items():
            if clave in DOCUMENTOS_IMPORTACION and valor:
                documentos[clave] = valor

        actualizado = actual.copiar(
            nombre=(datos.get('nombreCompleto') or actual.nombre).strip(),
            rut=datos.get('rut') or actual.rut,
            edad=calcular_edad(datos.get('fechaNacimiento'), hoy),
            fecha_nacimiento=a_fecha_o_none(datos.get('fechaNacimiento')),
            telefono=normalizar_telefono(datos.get('telefono')) or actual.telefono,
            ciudad=datos.get('ciudad') or actual.ciudad,
            nacionalidad=datos.get('nacionalidad') or actual.nacionalidad,
            especialidad=especialidad or actual.especialidad,
            documentos=documentos,
            es_prueba=False,
        )
        self._almacen.actualizar_trabajador(actualizado)
        logger.info(f"Perfil del trabajador {trabajador_id} completado")
        return actualizado

    def actualizar_credencial(self, trabajador_id, email=None, password=None):
        actual = self._almacen.requerir('credenciales', trabajador_id, 'Credencial')
        if email and email.strip() != actual.email and self._almacen.email_registrado(email, Rol.TRABAJADOR):
            raise TransicionInvalidaError('Ya existe una cuenta registrada con este email.')
        actualizada = actual.copiar(
            email=(email or actual.email).strip(),
            password=password or actual.password,
        )
        self._almacen.actualizar_credencial(actualizada)
        logger.info(f"Credencial del trabajador {trabajador_id} actualizada")
        return actualizada

    def eliminar_cuenta_trabajador(self, trabajador_id):
        self._almacen.eliminar_trabajador(trabajador_id)
        logger.info(f"Cuenta del trabajador {trabajador_id} eliminada")

    def listar_credenciales(self):
        """Credenciales con el nombre del trabajador asociado (o 'N/A' si el perfil no existe)."""
        filas = []
        for credencial in self._almacen.credenciales:
            trabajador = self._almacen.obtener_trabajador(credencial.id)
            datos = credencial.to_dict()
            datos['nombre'] = trabajador.nombre if trabajador else 'N/A'
            filas.append(datos)
        return filas
