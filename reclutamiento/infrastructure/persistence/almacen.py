# RUTA: reclutamiento/infrastructure/persistence/almacen.py
"""
Almacén de entidades en memoria.

Es el dueño de las siete colecciones de la plataforma. Cada modificación reemplaza
la colección completa (copia en escritura) y después intenta guardar la instantánea
a través del repositorio inyectado. Un fallo al guardar no invalida el estado en
memoria: se registra y queda disponible como advertencia para el usuario.
"""

import logging
from datetime import datetime

from reclutamiento.domain.exceptions import EntidadNoEncontradaError
from reclutamiento.domain.models.cliente import Cliente, Usuario
from reclutamiento.domain.models.cuentas import Admin, Revisor
from reclutamiento.domain.models.enums import Rol
from reclutamiento.domain.models.proyecto import Proyecto
from reclutamiento.domain.models.trabajador import Trabajador, TrabajadorCredencial

logger = logging.getLogger(__name__)

# atributo del almacén -> (clave en la instantánea, clase del modelo)
COLECCIONES = {
    'trabajadores': ('trabajadores', Trabajador),
    'clientes': ('clientes', Cliente),
    'usuarios': ('usuarios', Usuario),
    'proyectos': ('proyectos', Proyecto),
    'credenciales': ('credencialesTrabajadores', TrabajadorCredencial),
    'revisores': ('revisores', Revisor),
    'admins': ('admins', Admin),
}

MENSAJE_FALLO_PERSISTENCIA = (
    "Los cambios se aplicaron, pero no se pudieron guardar de forma permanente. "
    "Descargue un respaldo para no perder información."
)


class AlmacenEntidades:

    def __init__(self, repositorio=None, reloj=None):
        self._repo = repositorio
        self._reloj = reloj or datetime.now
        self._ultima_marca = 0
        self.trabajadores = []
        self.clientes = []
        self.usuarios = []
        self.proyectos = []
        self.credenciales = []
        self.revisores = []
        self.admins = []
        self.platform_logo = None
        self.advertencia_persistencia = None

    @classmethod
    def desde_repositorio(cls, repositorio, datos_iniciales=None, reloj=None):
        """
        Crea el almacén con la instantánea del repositorio. Si el repositorio está vacío
        se usa `datos_iniciales` (una instantánea), que además se guarda de inmediato.
        """
        almacen = cls(repositorio, reloj)
        snapshot = repositorio.cargar() if repositorio else None
        if snapshot is None and datos_iniciales is not None:
            almacen.cargar_snapshot(datos_iniciales)
            almacen._persistir()
        elif snapshot is not None:
            almacen.cargar_snapshot(snapshot)
        logger.info(
            f"Almacén cargado: {len(almacen.trabajadores)} trabajadores, "
            f"{len(almacen.proyectos)} proyectos, {len(almacen.clientes)} clientes."
        )
        return almacen

    # --- Instantáneas ---

    def cargar_snapshot(self, snapshot):
        for atributo, (clave, modelo) in COLECCIONES.items():
            registros = snapshot.get(clave) or []
            setattr(self, atributo, [modelo.from_dict(r) for r in registros])
        self.platform_logo = snapshot.get('platformLogo')

    def to_snapshot(self):
        snapshot = {}
        for atributo, (clave, _modelo) in COLECCIONES.items():
            snapshot[clave] = [entidad.to_dict() for entidad in getattr(self, atributo)]
        snapshot['platformLogo'] = self.platform_logo
        return snapshot

    def _persistir(self):
        if self._repo is None:
            return True
        try:
            self._repo.guardar(self.to_snapshot())
        except Exception as e:
            logger.warning(f"No se pudo guardar la instantánea de datos: {e}")
            self.advertencia_persistencia = MENSAJE_FALLO_PERSISTENCIA
            return False
        self.advertencia_persistencia = None
        return True

    # --- Identidad ---

    def _marca_tiempo(self):
        # Milisegundos estrictamente crecientes dentro del proceso
        marca = int(self._reloj().timestamp() * 1000)
        if marca <= self._ultima_marca:
            marca = self._ultima_marca + 1
        self._ultima_marca = marca
        return marca

    def nuevo_id(self, prefijo):
        return f"{prefijo}-{self._marca_tiempo()}"

    def nuevos_ids(self, prefijo, cantidad):
        """IDs para altas en lote: comparten la marca de tiempo y se distinguen por el índice."""
        marca = self._marca_tiempo()
        return [f"{prefijo}-{marca}-{i}" for i in range(cantidad)]

    # --- Lectura ---

    def _buscar(self, coleccion, entidad_id):
        if not entidad_id:
            return None
        return next((e for e in getattr(self, coleccion) if e.id == entidad_id), None)

    def obtener_trabajador(self, trabajador_id):
        return self._buscar('trabajadores', trabajador_id)

    def obtener_proyecto(self, proyecto_id):
        return self._buscar('proyectos', proyecto_id)

    def obtener_cliente(self, cliente_id):
        return self._buscar('clientes', cliente_id)

    def obtener_usuario(self, usuario_id):
        return self._buscar('usuarios', usuario_id)

    def obtener_revisor(self, revisor_id):
        return self._buscar('revisores', revisor_id)

    def obtener_admin(self, admin_id):
        return self._buscar('admins', admin_id)

    def obtener_credencial(self, trabajador_id):
        return self._buscar('credenciales', trabajador_id)

    def requerir(self, coleccion, entidad_id, tipo):
        """Como _buscar, pero lanza EntidadNoEncontradaError si el ID no existe."""
        entidad = self._buscar(coleccion, entidad_id)
        if entidad is None:
            raise EntidadNoEncontradaError(tipo, entidad_id)
        return entidad

    def cuentas_por_rol(self, rol):
        """Colección de cuentas contra la que se valida el inicio de sesión de cada rol."""
        if rol == Rol.ADMIN:
            return self.admins
        elif rol == Rol.REVISOR:
            return self.revisores
        elif rol == Rol.USUARIO:
            return self.usuarios
        elif rol == Rol.TRABAJADOR:
            return self.credenciales
        raise ValueError(f"Rol sin colección de cuentas: {rol!r}")

    def email_registrado(self, email, rol):
        email = (email or '').strip().lower()
        return any((c.email or '').lower() == email for c in self.cuentas_por_rol(rol))

    # --- Escritura (copia en escritura + persistencia) ---

    def _reemplazar_coleccion(self, coleccion, nueva_lista):
        setattr(self, coleccion, list(nueva_lista))
        return self._persistir()

    def _agregar(self, coleccion, entidades):
        return self._reemplazar_coleccion(coleccion, getattr(self, coleccion) + list(entidades))

    def _actualizar(self, coleccion, entidades, tipo):
        por_id = {e.id: e for e in entidades}
        actuales = getattr(self, coleccion)
        faltantes = set(por_id) - {e.id for e in actuales}
        if faltantes:
            raise EntidadNoEncontradaError(tipo, ', '.join(sorted(faltantes)))
        return self._reemplazar_coleccion(coleccion, [por_id.get(e.id, e) for e in actuales])

    def agregar_trabajadores(self, trabajadores):
        return self._agregar('trabajadores', trabajadores)

    def actualizar_trabajador(self, trabajador):
        return self._actualizar('trabajadores', [trabajador], 'Trabajador')

    def actualizar_trabajadores(self, trabajadores):
        """Reemplaza en una sola escritura todos los trabajadores indicados."""
        if not trabajadores:
            return True
        return self._actualizar('trabajadores', trabajadores, 'Trabajador')

    def eliminar_trabajador(self, trabajador_id):
        """Elimina el perfil del trabajador y su credencial."""
        self.requerir('trabajadores', trabajador_id, 'Trabajador')
        self.trabajadores = [t for t in self.trabajadores if t.id != trabajador_id]
        self.credenciales = [c for c in self.credenciales if c.id != trabajador_id]
        return self._persistir()

    def agregar_credencial(self, credencial):
        return self._agregar('credenciales', [credencial])

    def actualizar_credencial(self, credencial):
        return self._actualizar('credenciales', [credencial], 'Credencial')

    def agregar_proyecto(self, proyecto):
        return self._agregar('proyectos', [proyecto])

    def actualizar_proyecto(self, proyecto):
        return self._actualizar('proyectos', [proyecto], 'Proyecto')

    def agregar_cliente(self, cliente, usuarios):
        self.clientes = self.clientes + [cliente]
        self.usuarios = self.usuarios + list(usuarios)
        return self._persistir()

    def actualizar_cliente(self, cliente, usuarios=None):
        """
        Reemplaza el cliente. Si se entregan `usuarios`, sustituyen por completo
        a los usuarios que el cliente tenía.
        """
        self.requerir('clientes', cliente.id, 'Cliente')
        self.clientes = [cliente if c.id == cliente.id else c for c in self.clientes]
        if usuarios is not None:
            self.usuarios = [u for u in self.usuarios if u.cliente_id != cliente.id] + list(usuarios)
        return self._persistir()

    def agregar_revisor(self, revisor):
        return self._agregar('revisores', [revisor])

    def actualizar_revisor(self, revisor):
        return self._actualizar('revisores', [revisor], 'Revisor')

    def eliminar_revisor(self, revisor_id):
        """
        Elimina al revisor y deja sin revisor a los trabajadores que lo tenían asignado.
        Los trabajadores no se reasignan.
        """
        self.requerir('revisores', revisor_id, 'Revisor')
        self.revisores = [r for r in self.revisores if r.id != revisor_id]
        self.trabajadores = [
            t.copiar(revisor_asignado_id=None) if t.revisor_asignado_id == revisor_id else t
            for t in self.trabajadores
        ]
        return self._persistir()

    def actualizar_logo(self, logo):
        self.platform_logo = logo
        return self._persistir()
