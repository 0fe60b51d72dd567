"""
Exceções da camada de configuração do RecipeFlow.

Hierarquia usada durante o carregamento e a resolução (defaults +
overrides locais) dos arquivos que declaram receitas.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de prepare/bake de receita
      (esses vivem em `core.exceptions`)

Limites explícitos:
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório; o loader nunca cria um
    arquivo vazio implicitamente.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um mapeamento chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - defaults: {"recipe": {"strict_schema": true}}
        - override: {"recipe": "off"}

    Nenhum merge parcial é produzido em caso de conflito.
    """
