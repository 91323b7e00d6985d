# src/attribute_merge/core/attributes/hashing.py
"""
Hashing canônico de árvores de atributos mescladas.

Este módulo gera a identidade estrutural de uma árvore de atributos
resultante de um merge bem-sucedido, para uso em relatórios de
rastreabilidade e comparação entre execuções.

Política de hashing (v1):
    - A árvore é primeiro reduzida ao subconjunto JSON
      (dict com chaves string, list, str, int, float finito, bool, None)
    - Serialização JSON canônica com ordenação estável de chaves
    - Separadores compactos, codificação UTF-8
    - Algoritmo SHA-256

Decisões arquiteturais:
    - Valores fora do subconjunto JSON são rejeitados, nunca convertidos:
      chaves `1` e `"1"` ou `[1]` e `(1,)` são distintas para o checker
      e não podem colapsar no mesmo hash
    - A rejeição informa o caminho do primeiro valor não canônico

Limites explícitos:
    - Não realiza merge nem detecção de conflitos
    - Não persiste o hash
"""


import hashlib
import json
import math
from typing import Any, Dict

from .errors import NonCanonicalAttributesError
from .tree import AttributePath


_JSON_SCALARS = (str, int, bool, type(None))


def _canonical(value: Any, path: AttributePath) -> Any:
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for key, child in value.items():
            if not isinstance(key, str):
                raise NonCanonicalAttributesError(
                    f"Chave não-string {key!r} em '{path.render()}' não possui forma canônica",
                    attribute_path=path.child(key).render(),
                )
            out[key] = _canonical(child, path.child(key))
        return out

    if isinstance(value, list):
        return [_canonical(item, path) for item in value]

    if isinstance(value, float):
        if not math.isfinite(value):
            raise NonCanonicalAttributesError(
                f"Valor não finito {value!r} em '{path.render()}' não possui forma canônica",
                attribute_path=path.render(),
            )
        return value

    if type(value) in _JSON_SCALARS:
        return value

    raise NonCanonicalAttributesError(
        f"Valor do tipo {type(value).__name__} em '{path.render()}' não possui forma canônica",
        attribute_path=path.render(),
    )


def compute_attributes_hash(attributes: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de uma árvore de atributos.

    Árvores estruturalmente equivalentes produzem o mesmo hash,
    independentemente da ordem original das chaves.

    Invariantes:
        - O valor retornado é uma string hexadecimal de 64 caracteres
        - Nenhuma mutação ocorre sobre o input
        - Árvores distintas para o checker nunca compartilham a forma canônica

    Args:
        attributes (Dict[str, Any]): Árvore de atributos (tipicamente mesclada).

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
        NonCanonicalAttributesError: Se a árvore contiver chaves não-string,
            tuplas, floats não finitos ou objetos fora do subconjunto JSON.
    """

    if not isinstance(attributes, dict):
        raise TypeError(
            f"Atributos para hashing devem ser dict, recebido: {type(attributes).__name__}"
        )

    canonical_json = json.dumps(
        _canonical(attributes, AttributePath()),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
