"""HTTP blueprints, mounted under ``/api/<API_VERSION>`` by the app factory."""
