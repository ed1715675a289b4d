"""Seed catalog of departments and job titles."""

DEFAULT_DEPARTMENTS: tuple[tuple[int, str, str], ...] = (
    (1, "Contabilidad", "Gestión contable y financiera"),
    (2, "Logística", "Cadena de suministro y distribución"),
    (3, "Marketing", "Mercadeo y comunicaciones"),
    (4, "Operaciones", "Operación del negocio"),
    (5, "Recursos Humanos", "Gestión del talento humano"),
    (6, "Tecnología", "Sistemas y desarrollo de software"),
    (7, "Ventas", "Gestión comercial"),
)

DEFAULT_JOB_TITLES: tuple[tuple[int, str, str], ...] = (
    (1, "Administrador", "Administración de procesos"),
    (2, "Analista", "Análisis de información"),
    (3, "Auxiliar", "Apoyo operativo"),
    (4, "Coordinador", "Coordinación de equipos"),
    (5, "Desarrollador", "Desarrollo de software"),
    (6, "Ingeniero", "Ingeniería de soluciones"),
    (7, "Soporte Técnico", "Soporte a usuarios"),
)

# Job title assigned to self-registered employees
DEFAULT_JOB_TITLE_NAME = "Auxiliar"
