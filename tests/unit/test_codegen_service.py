"""Unit tests for template code generation and saved history."""
from datetime import datetime, timedelta

import pytest

from api.errors import NotFoundError, ValidationError
from api.schemas.records import CodeGeneration
from api.services.codegen_service import CodeGenService, generate_code, normalize_language, template_key


@pytest.mark.unit
class TestGenerateCode:
    @pytest.mark.parametrize(
        "language,key",
        [("Python", "python"), ("py", "python"), ("JavaScript", "javascript"), ("js", "javascript"),
         ("Java", "java"), ("C++", "cpp"), ("cpp", "cpp")],
    )
    def test_known_languages(self, language, key):
        generated = generate_code("reverse a string", language)
        assert generated.template == key
        assert generated.is_fallback is False
        assert "reverse a string" in generated.code
        assert generated.language == language

    def test_unknown_language_falls_back_to_javascript(self):
        generated = generate_code("reverse a string", "Rust")
        assert generated.template == "javascript"
        assert generated.is_fallback is True
        assert "function exampleFunction" in generated.code

    def test_explanation_mentions_prompt(self):
        generated = generate_code("binary search", "Python")
        assert 'prompt: "binary search"' in generated.explanation

    def test_dollar_signs_in_prompt_survive(self):
        generated = generate_code("format $amount as currency", "Python")
        assert "format $amount as currency" in generated.code

    @pytest.mark.parametrize("prompt", ["", "   \n"])
    def test_blank_prompt_rejected(self, prompt):
        with pytest.raises(ValidationError):
            generate_code(prompt, "Python")

    def test_normalize(self):
        assert normalize_language("  C++ ") == "cpp"
        assert normalize_language("Go") == "go"
        assert template_key("Go") == "javascript"


@pytest.mark.unit
class TestGenerationHistory:
    def test_save_and_list_newest_first(self, memory_client):
        service = CodeGenService(memory_client)
        base = datetime(2020, 4, 1)
        for i in range(3):
            memory_client.insert(
                "code_generations",
                CodeGeneration(user_id="u", prompt=f"p{i}", language="Python", generated_code="x",
                               created_at=base + timedelta(minutes=i)),
            )
        memory_client.insert(
            "code_generations",
            CodeGeneration(user_id="other", prompt="theirs", language="Python", generated_code="x"),
        )

        saved = service.save_generation("u", "p3", service.generate("p3", "Java"))
        assert saved.language == "Java"
        assert saved.is_bookmarked is False

        history = service.get_user_generations("u", limit=3)
        assert [g.prompt for g in history] == ["p3", "p2", "p1"]

    def test_bookmark_toggle(self, memory_client):
        service = CodeGenService(memory_client)
        saved = service.save_generation("u", "sort", service.generate("sort", "Python"))
        service.toggle_bookmark("u", saved.id, True)
        assert memory_client.select_one("code_generations", {"id": saved.id}).is_bookmarked is True
        service.toggle_bookmark("u", saved.id, False)
        assert memory_client.select_one("code_generations", {"id": saved.id}).is_bookmarked is False

    def test_other_users_rows_are_not_found(self, memory_client):
        service = CodeGenService(memory_client)
        saved = service.save_generation("owner", "sort", service.generate("sort", "Python"))
        with pytest.raises(NotFoundError):
            service.toggle_bookmark("intruder", saved.id, True)
        with pytest.raises(NotFoundError):
            service.delete_generation("intruder", saved.id)
        assert memory_client.select_one("code_generations", {"id": saved.id}) is not None

    def test_delete(self, memory_client):
        service = CodeGenService(memory_client)
        saved = service.save_generation("u", "sort", service.generate("sort", "Python"))
        service.delete_generation("u", saved.id)
        assert service.get_user_generations("u") == []
        with pytest.raises(NotFoundError):
            service.delete_generation("u", saved.id)
