# tests/conftest.py
"""
Fixtures compartilhados para testes do Topology Builder.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas do reconciliador
- documentos de topologia reduzidos
- providers falsos que registram chamadas (sem cluster real)
- backends em memória

Decisões arquiteturais:
    - Fixtures são simples e explícitas
    - Providers falsos usam duck typing em vez de herança
    - Nenhuma fixture realiza I/O de rede

Limites explícitos:
    - Não substituem testes de integração com um cluster real
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def reconciler_config_defaults_yaml() -> str:
    """YAML típico de `config.defaults.yaml` do reconciliador."""
    return """\
topology:
  separator: "."
platform:
  kafka_connect:
    servers:
      primary: http://connect-primary:8083
      secondary: http://connect-secondary:8083
backend:
  type: file
  path: state/cluster-state.json
"""


@pytest.fixture
def reconciler_config_local_yaml() -> str:
    """Overrides locais: troca o backend e substitui o mapa de servidores."""
    return """\
backend:
  type: memory
platform:
  kafka_connect:
    servers:
      primary: http://localhost:8083
"""


@pytest.fixture
def dummy_config() -> dict:
    """Configuração já resolvida com um único alias de Kafka Connect ('primary')."""
    return {
        "topology": {"separator": "."},
        "platform": {"kafka_connect": {"servers": {"primary": "http://localhost:8083"}}},
        "backend": {"type": "memory"},
    }


# =====================================================
# Topology documents
# =====================================================

@pytest.fixture
def minimal_document() -> dict:
    return {"context": "prod", "projects": [{"name": "p1", "topics": [{"name": "orders"}]}]}


@pytest.fixture
def full_document() -> dict:
    """Documento cobrindo plataforma, todos os papéis, RBAC, artefatos e passthrough."""
    return {
        "context": "contextOrg",
        "source": "source",
        "platform": {
            "kafka": {"instances": [{"principal": "User:Kafka"}]},
            "schema_registry": {"instances": [{"principal": "User:SchemaRegistry"}]},
            "control_center": {"instances": [{"principal": "User:C3", "appId": "c3"}]},
        },
        "projects": [
            {
                "name": "foo",
                "consumers": [{"principal": "User:App0"}, {"principal": "User:App1", "group": "g1"}],
                "producers": [{"principal": "User:App3", "transactionId": "tx-1", "idempotence": True}],
                "streams": [
                    {
                        "principal": "User:Streams0",
                        "applicationId": "app-0",
                        "topics": {"read": ["topicA"], "write": ["topicB"]},
                    }
                ],
                "connectors": {
                    "access_control": [
                        {"principal": "User:Connect1", "connectors": ["jdbc-sink"], "topics": {"read": ["topicA"]}}
                    ],
                    "artefacts": [
                        {"path": "connectors/source-jdbc.json", "server_label": "primary", "name": "source-jdbc"}
                    ],
                },
                "schemas": [{"principal": "User:Schemas", "subjects": ["topicA-value"]}],
                "rbac": [
                    {"ResourceOwner": [{"principal": "User:Foo"}]},
                    {"SecurityAdmin": [{"principal": "User:Bar"}, {"principal": "User:Baz"}]},
                ],
                "topics": [
                    {"name": "foo", "config": {"replication.factor": "1", "num.partitions": "1"}},
                    {"name": "bar", "dataType": "avro"},
                ],
            },
            {
                "name": "bar",
                "topics": [{"name": "bar"}],
            },
        ],
    }


# =====================================================
# Fake providers
# =====================================================

class RecordingProvider:
    """
    Provider falso que implementa todos os protocolos de provider
    e registra cada chamada em `calls`, na ordem.

    `fail_on` permite forçar falha de um método específico.
    """

    def __init__(self, fail_on=None, error=None):
        self.calls = []
        self.fail_on = set(fail_on or [])
        self.error = error or RuntimeError("cluster unavailable")

    def _record(self, method, *args):
        self.calls.append((method, args))
        if method in self.fail_on:
            raise self.error

    def create_or_update_topic(self, name, config):
        self._record("create_or_update_topic", name, config)

    def delete_topics(self, names):
        self._record("delete_topics", names)

    def create_bindings(self, bindings):
        self._record("create_bindings", bindings)

    def clear_bindings(self, bindings):
        self._record("clear_bindings", bindings)

    def create_accounts(self, accounts):
        self._record("create_accounts", accounts)

    def clear_accounts(self, accounts):
        self._record("clear_accounts", accounts)

    def create_artefact(self, artefact):
        self._record("create_artefact", artefact)

    def delete_artefact(self, artefact):
        self._record("delete_artefact", artefact)


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def make_provider():
    return RecordingProvider


@pytest.fixture
def backend():
    from topology_builder.core.backend.controller import InMemoryBackend
    return InMemoryBackend()


@pytest.fixture
def binding_factory():
    from topology_builder.core.model.state import TopologyAclBinding

    def _make(principal="User:App0", resource="prod.p1.orders", operation="READ"):
        return TopologyAclBinding(
            resource_type="TOPIC",
            resource_name=resource,
            host="*",
            operation=operation,
            principal=principal,
        )

    return _make
