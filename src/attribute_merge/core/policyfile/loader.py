# src/attribute_merge/core/policyfile/loader.py
"""
Leitura de Policyfiles declarativos em YAML.

Este módulo converte um documento YAML em `PolicyfileDeclarations`,
capturando erros de sintaxe e de conteúdo como mensagens legíveis.

Formato (v1):

    run_list: [foo, bar]           # ou uma string única
    default_source: community      # ou [chef_server, URI] ou {type:, uri:}
    cookbooks:
      - name: foo
        path: local_cookbooks/foo
      - name: bar
        git: git://example.com:me/bar-cookbook.git

Política de erros (v1):
    - Sintaxe YAML inválida → um único erro com linha/coluna e trecho
    - Chaves desconhecidas no nível raiz → erro de opção inválida
    - Problemas de conteúdo nunca levantam exceção
    - Interrupções do usuário (KeyboardInterrupt) não são capturadas

Limites explícitos:
    - Não avalia código (o Policyfile é puramente declarativo)
    - Não verifica atributos de cookbooks
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml  # PyYAML

from attribute_merge.core.context import ValidationContext

from .declarations import PolicyfileDeclarations
from .errors import PolicyfileNotFoundError


LOAD_STAGE = "policyfile.load"

KNOWN_KEYS = ("run_list", "default_source", "cookbooks")


def _apply_run_list(decl: PolicyfileDeclarations, value: Any) -> bool:
    items = [value] if isinstance(value, str) else value
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        decl.errors.append(
            f"run_list deve ser uma string ou lista de strings, recebido: {value!r}"
        )
        return False
    decl.set_run_list(*items)
    return True


def _apply_default_source(decl: PolicyfileDeclarations, value: Any) -> None:
    if isinstance(value, str):
        decl.set_default_source(value)
    elif isinstance(value, list) and 1 <= len(value) <= 2:
        decl.set_default_source(*value)
    elif isinstance(value, dict) and "type" in value:
        decl.set_default_source(value["type"], value.get("uri"))
    else:
        decl.errors.append(f"Tipo de default_source inválido: '{value}'")


def _iter_cookbooks(value: Any) -> Optional[List[Dict[Any, Any]]]:
    if isinstance(value, dict):
        entries = []
        for name, options in value.items():
            if options is not None and not isinstance(options, dict):
                return None
            entries.append({**(options or {}), "name": name})
        return entries

    if isinstance(value, list) and all(isinstance(e, dict) and "name" in e for e in value):
        return value

    return None


def _apply_cookbooks(decl: PolicyfileDeclarations, value: Any) -> None:
    entries = _iter_cookbooks(value)
    if entries is None:
        decl.errors.append(
            "cookbooks deve ser uma lista de mappings com 'name' "
            f"ou um mapping nome → fonte, recebido: {value!r}"
        )
        return

    for entry in entries:
        options = dict(entry)
        name = options.pop("name")
        if not isinstance(name, str):
            decl.errors.append(f"Nome de cookbook deve ser string, recebido: {name!r}")
            continue
        bad_keys = [k for k in options if not isinstance(k, str)]
        if bad_keys:
            decl.errors.append(
                f"Opções de fonte do cookbook '{name}' devem ter chaves string, "
                f"recebido: {', '.join(repr(k) for k in bad_keys)}"
            )
            continue
        decl.add_cookbook(name, options)


def evaluate_policyfile(
    text: str,
    filename: str = "Policyfile.yaml",
    *,
    ctx: Optional[ValidationContext] = None,
) -> PolicyfileDeclarations:
    """
    Avalia o conteúdo de um Policyfile YAML.

    Decisões arquiteturais:
        - Erros são acumulados em `errors`, nunca levantados
        - Após erro de sintaxe, nenhuma outra validação é aplicada
        - As seções são aplicadas na ordem canônica (run_list,
          default_source, cookbooks), seguida da validação final

    Args:
        text (str): Conteúdo YAML do Policyfile.
        filename (str): Nome exibido em mensagens de erro.
        ctx (Optional[ValidationContext]): Contexto para logs e warnings.

    Returns:
        PolicyfileDeclarations: Declarações e erros encontrados.
    """
    decl = PolicyfileDeclarations(filename=filename, ctx=ctx)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        decl.errors.append(f"Sintaxe YAML inválida no policyfile '{filename}':\n\n{exc}")
        _log_result(decl)
        return decl

    if data is None:
        data = {}

    if not isinstance(data, dict):
        decl.errors.append(
            f"Policyfile '{filename}' deve conter um mapping no nível raiz, "
            f"recebido: {type(data).__name__}"
        )
        _log_result(decl)
        return decl

    for key in data:
        if key not in KNOWN_KEYS:
            decl.errors.append(f"Opção inválida no policyfile '{filename}': '{key}'")

    run_list_ok = True
    if "run_list" in data:
        run_list_ok = _apply_run_list(decl, data["run_list"])
    if "default_source" in data:
        _apply_default_source(decl, data["default_source"])
    if "cookbooks" in data:
        _apply_cookbooks(decl, data["cookbooks"])

    decl.validate(check_run_list=run_list_ok)
    _log_result(decl)
    return decl


def load_policyfile(
    path: Union[str, Path],
    *,
    ctx: Optional[ValidationContext] = None,
) -> PolicyfileDeclarations:
    """
    Lê e avalia um Policyfile a partir do disco.

    Raises:
        PolicyfileNotFoundError: Se o arquivo não existir.
    """
    path = Path(path)
    if not path.exists():
        raise PolicyfileNotFoundError(f"Policyfile não encontrado: {path}")

    return evaluate_policyfile(path.read_text(encoding="utf-8"), path.name, ctx=ctx)


def _log_result(decl: PolicyfileDeclarations) -> None:
    if decl.ctx is None:
        return
    decl.ctx.log(
        stage=LOAD_STAGE,
        level="INFO" if decl.valid else "ERROR",
        message="Policyfile avaliado",
        filename=decl.filename,
        errors=len(decl.errors),
    )
