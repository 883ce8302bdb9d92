# src/topology_builder/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Topology Builder.

Este módulo define a hierarquia de exceções levantadas durante o
carregamento, a validação estrutural e a resolução da configuração
do reconciliador (aliases de servidores, separador de nomes, backend).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de configuração são falhas fatais
    - Nenhuma exceção aqui representa erro de topologia ou de execução

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do Topology Builder.

    Permite capturar genericamente falhas de configuração e distingui-las
    de falhas de parsing de topologia ou de execução de plano.
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Arquivo obrigatório (defaults de configuração ou documento de topologia)
    não encontrado no caminho informado.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Extensões desconhecidas são rejeitadas sem inspecionar o conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Conteúdo raiz do arquivo não é um dicionário (`dict`).

    Listas ou escalares no root são inválidos e não são encapsulados.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"backend": {"type": "file"}}
        - override: {"backend": "memory"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidConfigValueError(ConfigError):
    """
    Valor de configuração com tipo ou domínio inválido para o reconciliador
    (ex.: `platform.kafka_connect.servers` não é um mapa, backend desconhecido).
    """
