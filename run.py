# Importa la función que crea y configura la aplicación Flask.
from reclutamiento import create_app

# Crea una instancia de la aplicación llamando a la factoría.
app = create_app()

# Punto de entrada para ejecutar la aplicación.
# Se activa solo cuando el script es ejecutado directamente.
if __name__ == "__main__":
    # ADVERTENCIA: Este es un servidor de desarrollo.
    # Para producción, utiliza run_production.py (Waitress).
    app.run(host='0.0.0.0', port=5001, debug=app.config.get('DEBUG', False))
