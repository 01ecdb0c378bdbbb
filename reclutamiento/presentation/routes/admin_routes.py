# RUTA: reclutamiento/presentation/routes/admin_routes.py

from datetime import date

from flask import Blueprint, current_app, request, send_file
from flask_login import login_required

from reclutamiento.application.forms import CredencialForm, RevisorForm
from reclutamiento.decorators import role_required
from reclutamiento.domain.models.enums import EstadoProyecto, Rol
from reclutamiento.presentation.routes.respuestas import (
    datos_peticion, error_json, errores_formulario, respuesta_json, sin_password
)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


# ===== PANEL =====

@admin_bp.route('/', strict_slashes=False)
@login_required
@role_required(Rol.ADMIN)
def dashboard():
    """Indicadores globales filtrados por la fecha de registro de los trabajadores."""
    rango = request.args.get('rango', 'all')
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json(reportes_service.dashboard_admin(rango))


@admin_bp.route('/trabajadores')
@login_required
@role_required(Rol.ADMIN)
def listar_trabajadores():
    pestana = request.args.get('pestana', 'ingresados')
    termino = request.args.get('q', '').strip() or None
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json({'pestana': pestana, 'trabajadores': reportes_service.listado_trabajadores(pestana, termino)})


@admin_bp.route('/trabajadores/excel')
@login_required
@role_required(Rol.ADMIN)
def descargar_excel_trabajadores():
    pestana = request.args.get('pestana', 'ingresados')
    reportes_service = current_app.config['REPORTES_SERVICE']
    excel_stream = reportes_service.generar_excel_trabajadores(pestana)
    return send_file(
        excel_stream,
        as_attachment=True,
        download_name=f"trabajadores_{pestana}_{date.today().isoformat()}.xlsx",
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )


# ===== DISTRIBUCIÓN A REVISORES =====

@admin_bp.route('/distribucion')
@login_required
@role_required(Rol.ADMIN)
def distribucion():
    asignacion_service = current_app.config['ASIGNACION_SERVICE']
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json({
        'pendientes': [reportes_service.fila_trabajador(t) for t in asignacion_service.pendientes_de_distribucion()],
        'revisores': asignacion_service.cargas(),
    })


@admin_bp.route('/distribucion/manual', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def distribucion_manual():
    datos = datos_peticion()
    asignacion_service = current_app.config['ASIGNACION_SERVICE']
    actualizados = asignacion_service.asignar_manual(datos.get('trabajadorIds') or [], datos.get('revisorId'))
    return respuesta_json({
        'mensaje': f"{len(actualizados)} trabajadores asignados.",
        'asignados': [t.id for t in actualizados],
    })


@admin_bp.route('/distribucion/automatica', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def distribucion_automatica():
    asignacion_service = current_app.config['ASIGNACION_SERVICE']
    asignaciones = asignacion_service.distribuir_automaticamente()
    return respuesta_json({
        'mensaje': f"{len(asignaciones)} trabajadores distribuidos.",
        'asignaciones': asignaciones,
    })


# ===== REVISORES =====

@admin_bp.route('/revisores', methods=['GET', 'POST'])
@login_required
@role_required(Rol.ADMIN)
def revisores():
    almacen = current_app.config['ALMACEN']
    if request.method == 'GET':
        return respuesta_json({'revisores': [sin_password(r.to_dict()) for r in almacen.revisores]})

    form = RevisorForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    revisor = cuentas_service.crear_revisor(form.nombre.data, form.email.data, form.password.data)
    # La contraseña se muestra solo al crearlo para que el administrador la entregue
    return respuesta_json({'mensaje': 'Revisor creado con éxito.', 'revisor': revisor.to_dict()}, 201)


@admin_bp.route('/revisores/<revisor_id>', methods=['POST', 'DELETE'])
@login_required
@role_required(Rol.ADMIN)
def revisor(revisor_id):
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    if request.method == 'DELETE':
        afectados = cuentas_service.eliminar_revisor(revisor_id)
        return respuesta_json({
            'mensaje': f"Revisor eliminado. {afectados} trabajadores quedaron sin revisor asignado.",
            'afectados': afectados,
        })

    form = RevisorForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    proyectos = datos_peticion().get('proyectosAsignados')
    actualizado = cuentas_service.actualizar_revisor(
        revisor_id, form.nombre.data, form.email.data, form.password.data, proyectos
    )
    return respuesta_json({'mensaje': 'Revisor actualizado.', 'revisor': sin_password(actualizado.to_dict())})


# ===== CLIENTES =====

@admin_bp.route('/clientes', methods=['GET', 'POST'])
@login_required
@role_required(Rol.ADMIN)
def clientes():
    cliente_service = current_app.config['CLIENTE_SERVICE']
    if request.method == 'GET':
        return respuesta_json({'clientes': [c.to_dict() for c in cliente_service.listar()]})

    datos = datos_peticion()
    cliente = cliente_service.crear_cliente(datos, datos.get('usuarios') or [])
    return respuesta_json({'mensaje': 'Cliente creado con éxito.', 'cliente': cliente.to_dict()}, 201)


@admin_bp.route('/clientes/<cliente_id>', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def actualizar_cliente(cliente_id):
    datos = datos_peticion()
    cliente_service = current_app.config['CLIENTE_SERVICE']
    cliente = cliente_service.actualizar_cliente(cliente_id, datos, datos.get('usuarios') or [])
    return respuesta_json({'mensaje': 'Cliente actualizado.', 'cliente': cliente.to_dict()})


@admin_bp.route('/clientes/<cliente_id>/logo', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def logo_cliente(cliente_id):
    cliente_service = current_app.config['CLIENTE_SERVICE']
    cliente = cliente_service.actualizar_logo(cliente_id, datos_peticion().get('logo'))
    return respuesta_json({'mensaje': 'Logo actualizado.', 'logoUrl': cliente.logo_url})


# ===== PROYECTOS =====

@admin_bp.route('/proyectos', methods=['GET', 'POST'])
@login_required
@role_required(Rol.ADMIN)
def proyectos():
    proyecto_service = current_app.config['PROYECTO_SERVICE']
    if request.method == 'GET':
        estado = request.args.get('estado') or None
        return respuesta_json({'proyectos': [p.to_dict() for p in proyecto_service.listar(estado)]})

    estado = request.args.get('estado', EstadoProyecto.PUBLICADO.value)
    proyecto = proyecto_service.guardar_proyecto(datos_peticion(), estado)
    return respuesta_json({'mensaje': f"Proyecto guardado como {proyecto.estado.value}.", 'proyecto': proyecto.to_dict()}, 201)


@admin_bp.route('/proyectos/<proyecto_id>', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def actualizar_proyecto(proyecto_id):
    proyecto_service = current_app.config['PROYECTO_SERVICE']
    estado = request.args.get('estado', EstadoProyecto.PUBLICADO.value)
    proyecto = proyecto_service.guardar_proyecto(datos_peticion(), estado, proyecto_id)
    return respuesta_json({'mensaje': f"Proyecto guardado como {proyecto.estado.value}.", 'proyecto': proyecto.to_dict()})


# ===== IMPORTACIÓN MASIVA =====

@admin_bp.route('/importacion/previsualizar', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def previsualizar_importacion():
    registros = datos_peticion().get('registros') or []
    importacion_service = current_app.config['IMPORTACION_SERVICE']
    vista = importacion_service.previsualizar(registros)
    return respuesta_json({
        'registros': vista,
        'importables': sum(1 for fila in vista if not fila['tiene_error']),
    })


@admin_bp.route('/importacion/confirmar', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def confirmar_importacion():
    registros = datos_peticion().get('registros') or []
    importacion_service = current_app.config['IMPORTACION_SERVICE']
    resultado = importacion_service.importar(registros)
    return respuesta_json({
        'mensaje': f"Importación completada. Éxito: {resultado['exitosos']}, Omitidos: {resultado['omitidos']}.",
        'exitosos': resultado['exitosos'],
        'omitidos': resultado['omitidos'],
        'creados': [t.id for t in resultado['creados']],
    }, 201)


# ===== CUENTAS DE TRABAJADORES =====

@admin_bp.route('/cuentas')
@login_required
@role_required(Rol.ADMIN)
def cuentas():
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    return respuesta_json({'cuentas': cuentas_service.listar_credenciales()})


@admin_bp.route('/cuentas/<trabajador_id>', methods=['POST', 'DELETE'])
@login_required
@role_required(Rol.ADMIN)
def cuenta(trabajador_id):
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    if request.method == 'DELETE':
        cuentas_service.eliminar_cuenta_trabajador(trabajador_id)
        return respuesta_json({'mensaje': 'Cuenta eliminada.'})

    form = CredencialForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    if not form.email.data and not form.password.data:
        return error_json('No hay cambios que guardar.')
    credencial = cuentas_service.actualizar_credencial(trabajador_id, form.email.data, form.password.data)
    return respuesta_json({'mensaje': 'Credenciales actualizadas.', 'cuenta': sin_password(credencial.to_dict())})


# ===== PERSONALIZACIÓN Y RESPALDO =====

@admin_bp.route('/personalizacion/logo', methods=['POST'])
@login_required
@role_required(Rol.ADMIN)
def logo_plataforma():
    cliente_service = current_app.config['CLIENTE_SERVICE']
    cliente_service.actualizar_logo_plataforma(datos_peticion().get('logo'))
    return respuesta_json({'mensaje': 'Logo de la plataforma actualizado.'})


@admin_bp.route('/respaldo')
@login_required
@role_required(Rol.ADMIN)
def descargar_respaldo():
    respaldo_service = current_app.config['RESPALDO_SERVICE']
    nombre, contenido = respaldo_service.generar_respaldo()
    current_app.logger.info(f"Respaldo descargado: {nombre}")
    return send_file(contenido, as_attachment=True, download_name=nombre, mimetype='application/json')
