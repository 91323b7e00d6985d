# tests/conftest.py
"""
Fixtures compartilhados para testes do Attribute Merge.

Este módulo define fixtures reutilizáveis que fornecem:
- contribuições de atributos mínimas e determinísticas
- conteúdos YAML de atributos semelhantes ao uso real
- contexto de validação controlado (ValidationContext)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture executa verificação de merge

Este módulo existe como infraestrutura de teste e não
como validação funcional do pacote.
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Atributos
# =====================================================

@pytest.fixture
def nginx_attributes_yaml() -> str:
    """
    Fixture que fornece atributos de um cookbook `nginx` em YAML.

    Compartilha `[nginx][port]` com `base_attributes_yaml` usando o mesmo
    valor, e contribui chaves disjuntas sob `[nginx]`.

    Returns:
        str: Conteúdo YAML de atributos.
    """
    return """\
nginx:
  port: 80
  worker_processes: 4
  modules:
    - http_ssl
    - http_gzip
"""


@pytest.fixture
def base_attributes_yaml() -> str:
    return """\
nginx:
  port: 80
  user: www-data
ntp:
  servers:
    - 0.pool.ntp.org
"""


@pytest.fixture
def conflicting_attributes_yaml() -> str:
    """Atributos que divergem de `nginx_attributes_yaml` em `[nginx][port]`."""
    return """\
nginx:
  port: 8080
"""


# =====================================================
# Contexto de validação
# =====================================================

@pytest.fixture
def dummy_ctx():
    """
    Fixture que fornece um ValidationContext determinístico para testes.

    O import de ValidationContext é feito de forma lazy para melhorar
    a legibilidade dos erros quando o core não está disponível.

    Returns:
        ValidationContext: Contexto de validação isolado e previsível.
    """
    from attribute_merge.core.context import ValidationContext

    return ValidationContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )


@pytest.fixture
def fixed_ts() -> datetime:
    return datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)
