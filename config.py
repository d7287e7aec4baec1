import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

INDENT_SIZE = 2

STDIN_PLACEHOLDER = "-"


class ParserConfig:
    DIALECT = os.getenv("SQLCST_DIALECT", "postgres")
    ERROR_RECOVERY = os.getenv("SQLCST_RECOVER", "False").lower() == "true"


class GraphConfig:
    OUTPUT_FORMAT = os.getenv("SQLCST_GRAPH_FORMAT", "svg")
    OUTPUT_NAME = os.getenv("SQLCST_GRAPH_NAME", "cst_tree")


class AppConfig:
    DEBUG = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
