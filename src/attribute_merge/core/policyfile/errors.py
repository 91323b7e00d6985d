# src/attribute_merge/core/policyfile/errors.py
"""
Exceções da camada de Policyfile.

Problemas de conteúdo de um Policyfile nunca são exceções: são
acumulados em `PolicyfileDeclarations.errors`. Apenas falhas que
impedem a leitura do arquivo são levantadas.
"""


class PolicyfileError(Exception):
    """Exceção base da camada de Policyfile."""


class PolicyfileNotFoundError(PolicyfileError):
    """Exceção levantada quando o arquivo de Policyfile não existe."""
