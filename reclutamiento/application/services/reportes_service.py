# RUTA: reclutamiento/application/services/reportes_service.py
"""
Vistas de lectura: paneles de cada rol, tablero por proyecto, historial de rechazos
y listados de trabajadores. Todo se recalcula en cada consulta a partir del almacén.
"""

import io
import logging
from collections import Counter
from datetime import datetime, timedelta

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from reclutamiento.application.services.asignacion_service import carga_revisor, filtrar_por_termino
from reclutamiento.application.services.ciclo_vida_service import calcular_completitud, motivos_rechazo_para
from reclutamiento.domain.models.catalogos import ID_NO_ENCONTRADO, NO_DISPONIBLE, SIN_ASIGNAR
from reclutamiento.domain.models.enums import EstadoCliente, EstadoDocumental, ProximoEscenario

logger = logging.getLogger(__name__)

RANGOS_FECHA = ('this_week', 'last_week', 'last_4_weeks', 'all')
PESTANAS_TRABAJADORES = ('ingresados', 'libres', 'ocupados')

CONTRATADO = 'contratado'
LIBRE = 'libre'
EN_PROCESO = 'en_proceso'


# ===== FILTRO POR FECHA =====

def inicio_semana(momento):
    """Lunes 00:00 de la semana ISO que contiene `momento`."""
    lunes = momento - timedelta(days=momento.weekday())
    return lunes.replace(hour=0, minute=0, second=0, microsecond=0)


def intervalo_para_rango(rango, ahora):
    """
    Intervalo [inicio, fin) de fechas de registro para el rango pedido,
    o None si el rango es 'all'.
    """
    if rango == 'all':
        return None
    semana_actual = inicio_semana(ahora)
    if rango == 'this_week':
        return semana_actual, semana_actual + timedelta(weeks=1)
    elif rango == 'last_week':
        return semana_actual - timedelta(weeks=1), semana_actual
    elif rango == 'last_4_weeks':
        return semana_actual - timedelta(weeks=3), semana_actual + timedelta(weeks=1)
    raise ValueError(f"Rango de fechas desconocido: {rango}")


def filtrar_por_rango(trabajadores, rango, ahora=None):
    intervalo = intervalo_para_rango(rango, ahora or datetime.now())
    if intervalo is None:
        return list(trabajadores)
    inicio, fin = intervalo
    return [t for t in trabajadores if t.fecha_registro and inicio <= t.fecha_registro < fin]


# ===== HISTOGRAMAS =====

def _valor_texto(valor):
    return valor.value if hasattr(valor, 'value') else str(valor)


def contar_por(trabajadores, campo):
    """[{'name', 'value'}] en orden de primera aparición; se ignoran valores vacíos."""
    conteo = Counter()
    for t in trabajadores:
        valor = getattr(t, campo, None)
        if valor is None or valor == '':
            continue
        conteo[_valor_texto(valor)] += 1
    return [{'name': nombre, 'value': cantidad} for nombre, cantidad in conteo.items()]


def top_con_otros(datos, top_n=10):
    """
    Ordena de mayor a menor y, si hay más de `top_n` categorías, agrupa el resto en 'Otros'
    (solo si su suma es mayor que cero).
    """
    ordenados = sorted(datos, key=lambda d: d['value'], reverse=True)
    if len(ordenados) <= top_n:
        return ordenados
    otros = sum(d['value'] for d in ordenados[top_n:])
    resultado = ordenados[:top_n]
    if otros > 0:
        resultado.append({'name': 'Otros', 'value': otros})
    return resultado


# ===== OCUPACIÓN =====

def clasificar_ocupacion(trabajador):
    if trabajador.proximo_escenario == ProximoEscenario.CONTRATADO:
        return CONTRATADO
    if trabajador.estado_cliente == EstadoCliente.RECHAZADO or trabajador.en_pool_libre:
        return LIBRE
    return EN_PROCESO


def kpis_ocupacion(trabajadores):
    conteo = {CONTRATADO: 0, LIBRE: 0, EN_PROCESO: 0}
    for t in trabajadores:
        conteo[clasificar_ocupacion(t)] += 1
    return {'ocupados': conteo[CONTRATADO], 'libres': conteo[LIBRE], 'en_proceso': conteo[EN_PROCESO]}


# ===== TABLERO DE PROYECTO =====

def columnas_kanban(proyecto_id, trabajadores):
    del_proyecto = [t for t in trabajadores if t.proyecto_asignado == proyecto_id]

    def en(etapa):
        return [t for t in del_proyecto if t.proximo_escenario == etapa]

    return {
        'paraRevision': en(ProximoEscenario.INGRESO),
        'enEntrevista': en(ProximoEscenario.ENTREVISTA),
        'enEvaluacion': en(ProximoEscenario.EVALUACION),
        'listosParaContratar': en(ProximoEscenario.APROBADO_PARA_CONTRATAR),
        'carpetasSolicitadas': en(ProximoEscenario.CARPETA_SOLICITADA),
    }


def rechazados_en_proyecto(proyecto_id, trabajadores):
    return [
        t for t in trabajadores
        if t.ultimo_proyecto_asignado == proyecto_id and t.estado_cliente == EstadoCliente.RECHAZADO
    ]


class ReportesService:

    def __init__(self, almacen, top_n=10):
        self._almacen = almacen
        self._top_n = top_n

    # --- Resolución de referencias (tolerante a IDs rotos) ---

    def nombre_revisor(self, revisor_id):
        if not revisor_id:
            return SIN_ASIGNAR
        revisor = self._almacen.obtener_revisor(revisor_id)
        return revisor.nombre if revisor else ID_NO_ENCONTRADO

    def nombre_proyecto(self, proyecto_id):
        proyecto = self._almacen.obtener_proyecto(proyecto_id)
        return proyecto.nombre if proyecto else NO_DISPONIBLE

    def nombre_cliente(self, cliente_id):
        cliente = self._almacen.obtener_cliente(cliente_id)
        return cliente.nombre if cliente else NO_DISPONIBLE

    def fila_trabajador(self, t):
        """Representación de un trabajador para listados, con nombres ya resueltos."""
        datos = t.to_dict()
        datos.pop('documentos', None)
        datos['documentosPresentes'] = sorted(t.documentos.keys())
        datos['revisorNombre'] = self.nombre_revisor(t.revisor_asignado_id)
        datos['proyectoNombre'] = self.nombre_proyecto(t.proyecto_asignado or t.ultimo_proyecto_asignado)
        return datos

    # --- Administrador ---

    def estado_proyectos(self):
        trabajadores = self._almacen.trabajadores
        filas = []
        for proyecto in self._almacen.proyectos:
            if not proyecto.publicado:
                continue
            aprobados = sum(
                1 for t in trabajadores
                if t.proyecto_asignado == proyecto.id and t.estado_cliente == EstadoCliente.APROBADO
            )
            requeridos = proyecto.cantidad_trabajadores
            filas.append({
                'id': proyecto.id,
                'nombre': proyecto.nombre,
                'cliente': self.nombre_cliente(proyecto.cliente_id),
                'requeridos': requeridos,
                'aprobados': aprobados,
                'faltantes': max(0, requeridos - aprobados),
                'progreso': min(100.0, aprobados / requeridos * 100) if requeridos > 0 else 0.0,
                'fechaTerminoReclutamiento': proyecto.fecha_termino_reclutamiento.isoformat()
                if proyecto.fecha_termino_reclutamiento else None,
            })
        return filas

    def dashboard_admin(self, rango='all', ahora=None):
        filtrados = filtrar_por_rango(self._almacen.trabajadores, rango, ahora)
        return {
            'rango': rango,
            'total_trabajadores': len(filtrados),
            'kpis': kpis_ocupacion(filtrados),
            'por_especialidad': top_con_otros(contar_por(filtrados, 'especialidad'), self._top_n),
            'por_ciudad': top_con_otros(contar_por(filtrados, 'ciudad'), self._top_n),
            'por_nacionalidad': contar_por(filtrados, 'nacionalidad'),
            'por_estado_documental': contar_por(filtrados, 'estado_documental'),
            'estado_proyectos': self.estado_proyectos(),
            'total_clientes': len(self._almacen.clientes),
            'total_proyectos': len(self._almacen.proyectos),
        }

    def listado_trabajadores(self, pestana, termino=None):
        trabajadores = self._almacen.trabajadores
        if pestana == 'ingresados':
            seleccion = [t for t in trabajadores if t.estado_documental == EstadoDocumental.EN_REVISION]
        elif pestana == 'libres':
            seleccion = [
                t for t in trabajadores
                if t.en_pool_libre or t.estado_cliente == EstadoCliente.RECHAZADO
            ]
        elif pestana == 'ocupados':
            seleccion = [t for t in trabajadores if t.proximo_escenario == ProximoEscenario.CONTRATADO]
        else:
            raise ValueError(f"Pestaña desconocida: {pestana}")
        return [self.fila_trabajador(t) for t in filtrar_por_termino(seleccion, termino)]

    def generar_excel_trabajadores(self, pestana):
        """Exporta un listado de trabajadores a Excel."""
        filas = self.listado_trabajadores(pestana)
        wb = Workbook()
        ws = wb.active
        ws.title = f"Trabajadores {pestana}"

        headers = [
            "Nº", "Nombre", "Especialidad", "RUT", "Ciudad", "Nacionalidad", "Estado Documental",
            "Revisor Asignado", "Proyecto (Actual/Último)", "Estado Cliente", "Próximo Escenario",
        ]
        ws.append(headers)

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="0D47A1", end_color="0D47A1", fill_type="solid")
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")

        for fila in filas:
            ws.append([
                fila['numero'], fila['nombre'], fila['especialidad'], fila['rut'], fila['ciudad'],
                fila['nacionalidad'], fila['estadoDocumental'], fila['revisorNombre'], fila['proyectoNombre'],
                fila['estadoCliente'] or NO_DISPONIBLE, fila['proximoEscenario'] or NO_DISPONIBLE,
            ])

        for column_cells in ws.columns:
            length = max(len(str(cell.value or "")) for cell in column_cells)
            ws.column_dimensions[get_column_letter(column_cells[0].column)].width = length + 2

        excel_stream = io.BytesIO()
        wb.save(excel_stream)
        excel_stream.seek(0)
        logger.info(f"Reporte Excel generado: pestaña {pestana}, {len(filas)} filas")
        return excel_stream

    # --- Revisor ---

    def dashboard_revisor(self):
        trabajadores = self._almacen.trabajadores
        en_revision = sum(1 for t in trabajadores if t.estado_documental == EstadoDocumental.EN_REVISION)
        validados_disponibles = sum(1 for t in trabajadores if t.en_pool_libre)
        asignados = sum(1 for t in trabajadores if t.proyecto_asignado)
        rechazados = sum(1 for t in trabajadores if t.estado_documental == EstadoDocumental.RECHAZADO_DOCUMENTAL)
        return {
            'en_revision': en_revision,
            'validados_disponibles': validados_disponibles,
            'asignados': asignados,
            'proyectos_publicados': sum(1 for p in self._almacen.proyectos if p.publicado),
            'carpetas_solicitadas': sum(
                1 for t in trabajadores if t.proximo_escenario == ProximoEscenario.CARPETA_SOLICITADA
            ),
            'distribucion': [
                {'name': 'En Revisión', 'value': en_revision},
                {'name': 'Validados Disponibles', 'value': validados_disponibles},
                {'name': 'Asignados a Proyectos', 'value': asignados},
                {'name': 'Rechazados', 'value': rechazados},
            ],
        }

    def bandeja_validacion(self, revisor_id=None):
        """Trabajadores en revisión (opcionalmente solo los del revisor) y su carga."""
        pendientes = [t for t in self._almacen.trabajadores if t.estado_documental == EstadoDocumental.EN_REVISION]
        if revisor_id:
            pendientes = [t for t in pendientes if t.revisor_asignado_id == revisor_id]
        return {
            'pendientes': [self.fila_trabajador(t) for t in pendientes],
            'carga': carga_revisor(self._almacen.trabajadores, revisor_id) if revisor_id else len(pendientes),
        }

    def historial_rechazos(self):
        """Rechazados por documentación o por el cliente, ordenados por nombre."""
        rechazados = [
            t for t in self._almacen.trabajadores
            if t.estado_documental == EstadoDocumental.RECHAZADO_DOCUMENTAL
            or t.estado_cliente == EstadoCliente.RECHAZADO
        ]
        rechazados.sort(key=lambda t: (t.nombre or '').lower())
        filas = []
        for t in rechazados:
            fila = self.fila_trabajador(t)
            fila['ultimoProyectoNombre'] = self.nombre_proyecto(t.ultimo_proyecto_asignado)
            fila['tipoRechazo'] = (
                'Documental' if t.estado_documental == EstadoDocumental.RECHAZADO_DOCUMENTAL else 'Cliente'
            )
            filas.append(fila)
        return filas

    # --- Tablero de proyecto (revisor y usuario) ---

    def tablero_proyecto(self, proyecto_id):
        proyecto = self._almacen.requerir('proyectos', proyecto_id, 'Proyecto')
        trabajadores = self._almacen.trabajadores
        columnas = columnas_kanban(proyecto_id, trabajadores)
        tablero = {nombre: [self.fila_trabajador(t) for t in lista] for nombre, lista in columnas.items()}
        return {
            'proyecto': proyecto.to_dict(),
            'columnas': tablero,
            'rechazados': [self.fila_trabajador(t) for t in rechazados_en_proyecto(proyecto_id, trabajadores)],
            'completitud': calcular_completitud(proyecto, trabajadores),
            'motivos_rechazo': {
                etapa.value: motivos_rechazo_para(etapa)
                for etapa in (ProximoEscenario.INGRESO, ProximoEscenario.ENTREVISTA, ProximoEscenario.EVALUACION)
            },
        }

    # --- Usuario del cliente ---

    def dashboard_usuario(self, proyectos):
        """Resumen de los proyectos visibles para el usuario del cliente."""
        ids = {p.id for p in proyectos}
        en_proceso = [t for t in self._almacen.trabajadores if t.proyecto_asignado in ids]
        etapas = Counter(
            t.proximo_escenario.value for t in en_proceso
            if t.proximo_escenario
            and t.proximo_escenario not in (ProximoEscenario.CONTRATADO, ProximoEscenario.ACREDITACION)
        )
        return {
            'total_proyectos': len(proyectos),
            'total_candidatos': len(en_proceso),
            'total_vacantes': sum(p.cantidad_trabajadores for p in proyectos),
            'total_aprobados': sum(
                1 for t in en_proceso if t.proximo_escenario == ProximoEscenario.APROBADO_PARA_CONTRATAR
            ),
            'por_etapa': [{'name': nombre, 'value': cantidad} for nombre, cantidad in etapas.items()],
            'proyectos': [
                {
                    'id': p.id,
                    'nombre': p.nombre,
                    'completitud': calcular_completitud(p, self._almacen.trabajadores),
                }
                for p in proyectos
            ],
        }
