# RUTA: reclutamiento/domain/models/catalogos.py
# Catálogos fijos usados por formularios, importación y reportes.

from reclutamiento.domain.models.enums import ProximoEscenario

ESPECIALIDADES = [
    # Supervisión y Planificación
    'Supervisor General',
    'Supervisor Mecánico',
    'Supervisor Eléctrico',
    'Supervisor de Instrumentación',
    'Jefe de Terreno',
    'Planificador de Parada',
    'Prevencionista de Riesgos (HSE)',
    # Oficios Mecánicos
    'Mecánico de Mantenimiento',
    'Mecánico Montajista',
    'Ajustador Mecánico',
    'Soldador Calificado (6G, TIG, MIG)',
    'Calderero',
    'Tubero / Piping',
    # Oficios Eléctricos e Instrumentación
    'Eléctrico Industrial',
    'Eléctrico de Mantenimiento',
    'Instrumentista',
    # Operadores y Maniobras
    'Operador de Grúa',
    'Operador de Maquinaria Pesada',
    'Rigger / Maniobrista',
    # Apoyo y Varios
    'Andamiero',
    'Obras Civiles',
    'Bodeguero / Pañolero',
    'Ayudante / Jornal',
    'Otro',
]

CIUDADES = ['Antofagasta', 'Calama', 'Santiago', 'Copiapó', 'Iquique', 'Concepción']
NACIONALIDADES = ['Chilena', 'Peruana', 'Boliviana', 'Venezolana', 'Colombiana', 'Otra']

# Turnos estándar de la industria (nombre -> horario). 'Otro' deja el horario libre.
TURNOS_INDUSTRIA = {
    '7x7 Día': '07:00 - 19:00',
    '7x7 Noche': '19:00 - 07:00',
    '4x4 Día': '08:00 - 20:00',
    '4x4 Noche': '20:00 - 08:00',
    '5x2 L-V': 'L-V 08:00 - 17:00',
    '10x10': '10 días de trabajo, 10 de descanso',
    '14x14': '14 días de trabajo, 14 de descanso',
    'Administrativo': 'L-J 08-18, V 08-14',
    'Otro': '',
}

# Motivos sugeridos por etapa. Solo orientan al usuario: el motor exige un motivo no vacío.
MOTIVOS_RECHAZO = {
    ProximoEscenario.INGRESO: ['No cumple perfil', 'Documentación insuficiente', 'Contacto no exitoso'],
    ProximoEscenario.ENTREVISTA: ['No asistió a entrevista', 'Rechazado en entrevista técnica', 'Rechazado en entrevista psicológica'],
    ProximoEscenario.EVALUACION: ['No asistió a exámenes', 'Rechazado por exámenes médicos', 'Rechazado por test de drogas'],
}

# Documentos reconocidos en la importación masiva
DOCUMENTOS_IMPORTACION = ('cv', 'cedula', 'antecedentes', 'certificado')
DOCUMENTOS_OBLIGATORIOS = ('cv', 'cedula', 'antecedentes')

NOTA_CARPETA_SOLICITADA = 'Carpeta de contratación solicitada por cliente.'
NOTA_ACREDITACION = 'Enviado a acreditación.'
NOTA_CONTRATADO = 'Contratación confirmada.'

# Placeholders para referencias rotas en las vistas de lectura
SIN_ASIGNAR = 'Sin asignar'
ID_NO_ENCONTRADO = 'ID no encontrado'
NO_DISPONIBLE = 'N/A'
