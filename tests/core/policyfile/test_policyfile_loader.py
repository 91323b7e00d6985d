# tests/core/policyfile/test_policyfile_loader.py
"""
Testes de avaliação de Policyfiles declarativos.

Este módulo valida a conversão de documentos YAML em declarações de
Policyfile e a captura de erros como mensagens legíveis.

Os testes asseguram que:
- um Policyfile vazio é inválido (run_list vazia)
- erros de sintaxe são capturados com contexto de linha
- fontes padrão (community, chef_server) são interpretadas
- overrides de fonte por cookbook são registrados
- fontes conflitantes para o mesmo cookbook geram erro

Decisões arquiteturais:
    - Problemas de conteúdo nunca levantam exceção
    - Apenas a ausência do arquivo é exceção
"""

import pytest

try:
    from attribute_merge.core.policyfile import (
        ChefServerCookbookSource,
        CommunityCookbookSource,
        PolicyfileNotFoundError,
        evaluate_policyfile,
        load_policyfile,
    )
except Exception as e:  # noqa: BLE001
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing policyfile API. Implement:\n"
            "- src/attribute_merge/core/policyfile/loader.py (evaluate_policyfile, load_policyfile)\n"
            f"Import error: {_IMPORT_ERR}"
        )


# -----------------------------
# Policyfiles inválidos
# -----------------------------
def test_empty_policyfile_has_invalid_run_list():
    _require_imports()
    policyfile = evaluate_policyfile("", "TestPolicyfile.yaml")

    assert policyfile.errors == ["run_list inválido: run_list não pode ser vazio"]


def test_syntax_error_is_captured_with_context():
    """
    Verifica que YAML sintaticamente inválido gera um único erro com o
    nome do arquivo e a posição do problema, sem levantar exceção.
    """
    _require_imports()
    policyfile = evaluate_policyfile("run_list: [foo\ncookbooks: {", "TestPolicyfile.yaml")

    assert len(policyfile.errors) == 1
    message = policyfile.errors[0]
    assert message.startswith("Sintaxe YAML inválida no policyfile 'TestPolicyfile.yaml':")
    assert "line" in message


def test_non_mapping_root_is_an_error():
    _require_imports()
    policyfile = evaluate_policyfile("- foo\n", "TestPolicyfile.yaml")

    assert len(policyfile.errors) == 1
    assert "mapping no nível raiz" in policyfile.errors[0]


def test_invalid_default_source_type():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: foo\ndefault_source: [herp, derp]\n", "TestPolicyfile.yaml"
    )

    assert policyfile.errors == ["Tipo de default_source inválido: 'herp'"]


def test_chef_server_default_source_requires_uri():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: foo\ndefault_source: chef_server\n", "TestPolicyfile.yaml"
    )

    assert policyfile.errors == [
        "É necessário informar a URI do servidor ao usar default_source chef_server"
    ]


def test_unknown_option_is_reported():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: foo\nrecipes: [bar]\n", "TestPolicyfile.yaml")

    assert policyfile.errors == ["Opção inválida no policyfile 'TestPolicyfile.yaml': 'recipes'"]


def test_run_list_of_wrong_type_is_reported_once():
    """
    Verifica que uma run_list de tipo inválido gera apenas o erro de
    tipo, sem o erro adicional de run_list vazia.
    """
    _require_imports()
    policyfile = evaluate_policyfile("run_list: {a: 1}\n", "TestPolicyfile.yaml")

    assert policyfile.errors == [
        "run_list deve ser uma string ou lista de strings, recebido: {'a': 1}"
    ]


def test_cookbook_option_with_non_string_key_is_reported():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: foo\ncookbooks:\n  foo:\n    1: x\n")

    assert policyfile.errors == [
        "Opções de fonte do cookbook 'foo' devem ter chaves string, recebido: 1"
    ]
    assert policyfile.cookbook_source_overrides == {}


def test_cookbook_with_non_string_name_is_reported():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: foo\ncookbooks:\n  1:\n    path: x\n")

    assert policyfile.errors == ["Nome de cookbook deve ser string, recebido: 1"]


# -----------------------------
# Policyfiles válidos
# -----------------------------
def test_minimal_policyfile():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: [foo, bar]\n")

    assert policyfile.errors == []
    assert policyfile.run_list == ["foo", "bar"]
    assert policyfile.default_source is None


def test_community_default_source():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: [foo, bar]\ndefault_source: community\n")

    assert policyfile.errors == []
    assert policyfile.default_source == CommunityCookbookSource("https://api.berkshelf.com")


def test_community_default_source_with_custom_uri():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: [foo, bar]\n"
        "default_source: [community, 'https://cookbook-api.example.com']\n"
    )

    assert policyfile.errors == []
    assert policyfile.default_source == CommunityCookbookSource("https://cookbook-api.example.com")


def test_chef_server_default_source():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: [foo, bar]\n"
        "default_source:\n"
        "  type: chef_server\n"
        "  uri: https://mychef.example.com\n"
    )

    assert policyfile.errors == []
    assert policyfile.default_source == ChefServerCookbookSource("https://mychef.example.com")


@pytest.mark.parametrize(
    "options",
    [
        {"path": "local_cookbooks/foo"},
        {"git": "git://example.com:me/foo-cookbook.git"},
        {"chef_server": "https://mychefserver.example.com"},
    ],
)
def test_cookbook_source_overrides(options):
    _require_imports()
    (key, value), = options.items()
    policyfile = evaluate_policyfile(
        f"run_list: foo\ncookbooks:\n  - name: foo\n    {key}: '{value}'\n"
    )

    assert policyfile.errors == []
    assert policyfile.cookbook_source_overrides == {"foo": options}


def test_cookbooks_as_mapping():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: foo\ncookbooks:\n  foo:\n    path: local_cookbooks/foo\n"
    )

    assert policyfile.cookbook_source_overrides == {"foo": {"path": "local_cookbooks/foo"}}


def test_cookbook_option_named_self_is_kept():
    _require_imports()
    policyfile = evaluate_policyfile("run_list: foo\ncookbooks:\n  - name: foo\n    self: x\n")

    assert policyfile.errors == []
    assert policyfile.cookbook_source_overrides == {"foo": {"self": "x"}}


def test_conflicting_cookbook_sources():
    _require_imports()
    policyfile = evaluate_policyfile(
        "run_list: foo\n"
        "cookbooks:\n"
        "  - name: foo\n"
        "    path: local_cookbooks/foo\n"
        "  - name: foo\n"
        "    chef_server: https://mychefserver.example.com\n"
    )

    expected = (
        "Cookbook 'foo' atribuído a fontes conflitantes\n"
        "\n"
        "Fonte anterior: {path: 'local_cookbooks/foo'}\n"
        "Conflita com: {chef_server: 'https://mychefserver.example.com'}\n"
    )
    assert policyfile.errors == [expected]
    assert policyfile.cookbook_source_overrides == {"foo": {"path": "local_cookbooks/foo"}}


def test_evaluation_logs_result(dummy_ctx):
    _require_imports()
    evaluate_policyfile("", "TestPolicyfile.yaml", ctx=dummy_ctx)

    ev = dummy_ctx.events[-1]
    assert ev["stage"] == "policyfile.load"
    assert ev["level"] == "ERROR"
    assert ev["errors"] == 1


# -----------------------------
# Leitura do disco
# -----------------------------
def test_load_policyfile_from_disk(tmp_path):
    _require_imports()
    p = tmp_path / "Policyfile.yaml"
    p.write_text("run_list: [foo]\n", encoding="utf-8")

    policyfile = load_policyfile(p)

    assert policyfile.filename == "Policyfile.yaml"
    assert policyfile.run_list == ["foo"]
    assert policyfile.valid


def test_missing_policyfile_raises(tmp_path):
    _require_imports()
    with pytest.raises(PolicyfileNotFoundError):
        load_policyfile(tmp_path / "Policyfile.yaml")
