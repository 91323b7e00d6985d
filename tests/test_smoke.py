# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Attribute Merge.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- a API pública de topo está exposta

Limites explícitos:
    - Não testar lógica de merge
    - Não acumular asserts funcionais
"""

import attribute_merge


def test_smoke():
    """
    Smoke test mínimo do pacote.

    Garante feedback imediato em CI antes dos testes de domínio.
    """
    assert attribute_merge.__version__
    assert {"AttributeMergeChecker", "ConflictError", "MergedAttributes"} <= set(
        attribute_merge.__all__
    )
