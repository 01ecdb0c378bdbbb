# RUTA: reclutamiento/application/forms.py

from datetime import datetime, timedelta

from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, PasswordField, StringField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length, Optional, ValidationError

# ===== VALIDADORES PERSONALIZADOS (ANTES DE LAS CLASES) =====

def validate_fecha_nacimiento(form, field):
    """Valida que la fecha de nacimiento sea válida: no en el futuro y edad mínima de 18 años."""
    if field.data:
        hoy = datetime.now().date()

        if field.data > hoy:
            raise ValidationError('La fecha de nacimiento no puede ser en el futuro.')

        edad_minima = hoy - timedelta(days=18*365.25)
        if field.data > edad_minima:
            raise ValidationError('El trabajador debe tener al menos 18 años de edad.')

        edad_maxima = hoy - timedelta(days=100*365.25)
        if field.data < edad_maxima:
            raise ValidationError('La fecha de nacimiento no puede ser hace más de 100 años.')

def validate_telefono(form, field):
    """Valida el formato del teléfono."""
    if field.data:
        telefono_limpio = field.data.replace(" ", "").replace("-", "").lstrip("+")

        if not telefono_limpio.isdigit():
            raise ValidationError('El teléfono solo debe contener números, espacios y guiones.')

        if len(telefono_limpio) < 8 or len(telefono_limpio) > 15:
            raise ValidationError('El teléfono debe tener entre 8 y 15 dígitos.')

def validate_rut(form, field):
    """Formato de RUT chileno: cuerpo numérico (con o sin puntos), guion y dígito verificador."""
    if field.data:
        cuerpo, _, dv = field.data.replace('.', '').partition('-')
        if not cuerpo.isdigit() or len(dv) != 1 or not (dv.isdigit() or dv.upper() == 'K'):
            raise ValidationError('El RUT debe tener el formato 12.345.678-9.')

def validate_motivo_no_vacio(form, field):
    if field.data is not None and not field.data.strip():
        raise ValidationError('Debe indicar un motivo.')

# ===== FIN DE VALIDADORES PERSONALIZADOS =====


def _strip(valor):
    return valor.strip() if isinstance(valor, str) else valor


class LoginForm(FlaskForm):
    email = StringField('Correo electrónico', validators=[DataRequired(), Email()], filters=[_strip])
    password = PasswordField('Contraseña', validators=[DataRequired()])
    remember_me = BooleanField('Mantenerme conectado')
    submit = SubmitField('Iniciar Sesión')


class RegistroCuentaForm(FlaskForm):
    email = StringField('Correo electrónico', validators=[DataRequired(), Email()], filters=[_strip])
    password = PasswordField('Contraseña', validators=[
        DataRequired(),
        Length(min=4, message="La contraseña debe tener al menos 4 caracteres.")
    ])
    confirmar_password = PasswordField('Confirmar contraseña', validators=[
        DataRequired(),
        EqualTo('password', message='Las contraseñas no coinciden.')
    ])
    submit = SubmitField('Crear Cuenta')


class PerfilTrabajadorForm(FlaskForm):
    nombre_completo = StringField('Nombre completo', validators=[DataRequired(), Length(max=120)], filters=[_strip])
    rut = StringField('RUT', validators=[DataRequired(), validate_rut], filters=[_strip])
    telefono = StringField('Teléfono', validators=[Optional(), validate_telefono])
    fecha_nacimiento = DateField('Fecha de nacimiento', validators=[DataRequired(), validate_fecha_nacimiento])
    ciudad = StringField('Ciudad', validators=[DataRequired()])
    nacionalidad = StringField('Nacionalidad', validators=[DataRequired()])
    especialidad = StringField('Especialidad', validators=[DataRequired()])
    # Sin Optional(): la validación en línea debe correr aunque el campo venga vacío
    otra_especialidad = StringField('Otra especialidad', validators=[Length(max=80)])
    submit = SubmitField('Finalizar Registro')

    def validate_otra_especialidad(self, field):
        if self.especialidad.data == 'Otro' and not (field.data or '').strip():
            raise ValidationError('Indique su especialidad.')


class MotivoRechazoForm(FlaskForm):
    motivo = StringField('Motivo', validators=[DataRequired(message='Debe indicar un motivo.'), validate_motivo_no_vacio])
    submit = SubmitField('Confirmar Rechazo')


class AsignacionProyectoForm(FlaskForm):
    proyecto_id = StringField('Proyecto', validators=[DataRequired(message='Debe seleccionar un proyecto.')])
    submit = SubmitField('Asignar')


class RevisorForm(FlaskForm):
    nombre = StringField('Nombre', validators=[DataRequired(), Length(max=100)], filters=[_strip])
    email = StringField('Email', validators=[DataRequired(), Email()], filters=[_strip])
    password = StringField('Contraseña', validators=[Optional(), Length(min=4, max=50)])
    submit = SubmitField('Guardar Revisor')


class CredencialForm(FlaskForm):
    email = StringField('Email', validators=[Optional(), Email()], filters=[_strip])
    password = StringField('Nueva contraseña', validators=[Optional(), Length(min=4, max=50)])
    submit = SubmitField('Guardar Cambios')
