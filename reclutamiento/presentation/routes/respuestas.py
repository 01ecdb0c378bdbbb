# RUTA: reclutamiento/presentation/routes/respuestas.py

from flask import current_app, jsonify, request


def respuesta_json(cuerpo=None, status=200):
    """Respuesta JSON que además avisa si el último guardado en disco falló."""
    cuerpo = dict(cuerpo or {})
    advertencia = current_app.config['ALMACEN'].advertencia_persistencia
    if advertencia:
        cuerpo['advertencia'] = advertencia
    return jsonify(cuerpo), status


def error_json(mensaje, status=400, **extra):
    cuerpo = {'error': mensaje}
    cuerpo.update(extra)
    return jsonify(cuerpo), status


def errores_formulario(form):
    return error_json('Datos inválidos.', 400, errores=form.errors)


def datos_peticion():
    """Cuerpo JSON de la petición; un cuerpo ausente o mal formado se trata como vacío."""
    datos = request.get_json(silent=True)
    return datos if isinstance(datos, dict) else {}


def sin_password(datos):
    return {clave: valor for clave, valor in datos.items() if clave != 'password'}
