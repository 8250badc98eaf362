"""
Code generation demo.

Generation is a keyed template lookup, not a model call: the prompt is
spliced into a per-language example. Unknown languages fall back to the
JavaScript template.
"""

from string import Template
from typing import Optional

from api.config import settings
from api.errors import NotFoundError, ValidationError
from api.persistence import PersistenceClient
from api.schemas.codegen_schemas import GeneratedCode
from api.schemas.records import CodeGeneration
from api.utils.logger import configure_logging

logger = configure_logging()

TABLE = "code_generations"
FALLBACK_TEMPLATE = "javascript"

TEMPLATES: dict[str, Template] = {
    "python": Template('''def example_function(param1, param2):
    """
    $prompt

    Args:
        param1: First parameter
        param2: Second parameter

    Returns:
        Result of the operation
    """
    result = param1 + param2
    return result

if __name__ == "__main__":
    print(example_function(5, 10))'''),
    "javascript": Template('''/**
 * $prompt
 * @param {*} param1 - First parameter
 * @param {*} param2 - Second parameter
 * @returns {*} Result of the operation
 */
function exampleFunction(param1, param2) {
  const result = param1 + param2;
  return result;
}

console.log(exampleFunction(5, 10));'''),
    "java": Template('''/**
 * $prompt
 */
public class Example {
    public static void main(String[] args) {
        int result = exampleMethod(5, 10);
        System.out.println(result);
    }

    public static int exampleMethod(int param1, int param2) {
        return param1 + param2;
    }
}'''),
    "cpp": Template('''#include <iostream>
using namespace std;

/**
 * $prompt
 */
int exampleFunction(int param1, int param2) {
    return param1 + param2;
}

int main() {
    cout << exampleFunction(5, 10) << endl;
    return 0;
}'''),
}

ALIASES = {"py": "python", "js": "javascript", "c++": "cpp"}


def normalize_language(language: str) -> str:
    key = language.strip().lower()
    return ALIASES.get(key, key)


def template_key(language: str) -> str:
    key = normalize_language(language)
    return key if key in TEMPLATES else FALLBACK_TEMPLATE


def generate_code(prompt: str, language: str) -> GeneratedCode:
    if not prompt.strip():
        raise ValidationError("prompt must not be blank", table=TABLE)
    key = template_key(language)
    return GeneratedCode(
        code=TEMPLATES[key].safe_substitute(prompt=prompt),
        explanation=(
            f'This is a generated {language} code example based on your prompt: "{prompt}". '
            "The code demonstrates a basic implementation pattern."
        ),
        language=language,
        template=key,
        is_fallback=normalize_language(language) not in TEMPLATES,
    )


class CodeGenService:
    """Template generation plus the per-user saved history."""

    def __init__(self, client: PersistenceClient):
        self.client = client

    def generate(self, prompt: str, language: str) -> GeneratedCode:
        generated = generate_code(prompt, language)
        if generated.is_fallback:
            logger.info("codegen fallback language=%s template=%s", language, generated.template)
        return generated

    def save_generation(self, user_id: str, prompt: str, generated: GeneratedCode) -> CodeGeneration:
        return self.client.insert(
            TABLE,
            CodeGeneration(
                user_id=user_id,
                prompt=prompt,
                language=generated.language,
                generated_code=generated.code,
                explanation=generated.explanation,
            ),
        )

    def get_user_generations(self, user_id: str, limit: Optional[int] = None) -> list[CodeGeneration]:
        return self.client.select(
            TABLE,
            {"user_id": user_id},
            order=[("created_at", "desc")],
            limit=limit or settings.CODEGEN_HISTORY_LIMIT,
        )

    def toggle_bookmark(self, user_id: str, generation_id: str, is_bookmarked: bool) -> None:
        matched = self.client.update(TABLE, {"id": generation_id, "user_id": user_id}, {"is_bookmarked": is_bookmarked})
        if matched == 0:
            raise NotFoundError(f"generation {generation_id} not found", table=TABLE)

    def delete_generation(self, user_id: str, generation_id: str) -> None:
        if self.client.delete(TABLE, {"id": generation_id, "user_id": user_id}) == 0:
            raise NotFoundError(f"generation {generation_id} not found", table=TABLE)
