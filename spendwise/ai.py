"""AI budget suggestions and budget plans backed by Gemini.

Both flows render a prompt from typed input, ask the model for JSON and
validate the reply against a pydantic schema. Any failure surfaces as
``AIServiceError`` so callers can show a single failure notice.
"""

import json
import logging
import re
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from spendwise import config
from spendwise.domain import Category, CategoryWithDetails

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CategoryData(_Schema):
    name: str
    spent: float
    budget: float


class BudgetSuggestionsInput(_Schema):
    categories: List[CategoryData]


class Suggestion(_Schema):
    category_name: str = Field(alias="categoryName")
    suggestion: str


class BudgetSuggestionsOutput(_Schema):
    suggestions: List[Suggestion]


class PlanCategory(_Schema):
    name: str


class BudgetPlanInput(_Schema):
    total_budget: float = Field(alias="totalBudget", gt=0)
    categories: List[PlanCategory]


class BudgetItem(_Schema):
    category_name: str = Field(alias="categoryName")
    amount: float


class BudgetPlanOutput(_Schema):
    plan: List[BudgetItem]


SUGGESTIONS_PROMPT = """You are a personal finance advisor. Analyze the following spending data and budget goals for each category, and provide a suggestion for each.

{categories}

Provide your suggestions as an array of objects, where each object has a "categoryName" and a "suggestion". Focus on actionable advice to optimize spending and savings. For instance:
{{
  "suggestions": [
    {{"categoryName": "Food", "suggestion": "Reduce eating out by 10% and cook at home more often."}},
    {{"categoryName": "Transportation", "suggestion": "Consider biking or public transport for short commutes."}},
    {{"categoryName": "Utilities", "suggestion": "Lower the thermostat by 2 degrees to reduce energy consumption."}}
  ]
}}"""

PLAN_PROMPT = """You are a friendly and helpful personal finance advisor.
A user wants to create a monthly budget. Their total budget is {total}.

Please create a sensible budget plan by allocating the total budget across the following categories:
{categories}

Your response should be a plan that allocates the entire {total} across the categories.
Ensure the sum of all category amounts in your plan equals the provided total budget.
Provide the output as {{"plan": [...]}}, an array of objects, where each object has "categoryName" and "amount"."""


def _number(value: float) -> str:
    return f"{value:g}"


def render_suggestions_prompt(data: BudgetSuggestionsInput) -> str:
    lines = []
    for c in data.categories:
        lines.append(f"- Category: {c.name}")
        lines.append(f"  - Spent: {_number(c.spent)}")
        lines.append(f"  - Budget: {_number(c.budget)}")
    return SUGGESTIONS_PROMPT.format(categories="\n".join(lines))


def render_plan_prompt(data: BudgetPlanInput) -> str:
    categories = "\n".join(f"- {c.name}" for c in data.categories)
    return PLAN_PROMPT.format(total=_number(data.total_budget), categories=categories)


def extract_json(text: str) -> dict:
    """Pull a JSON object out of a model reply (bare, fenced, or embedded)."""
    candidates = [text]
    fenced = re.search(r"```(?:json)?\s*([\s\S]*?)```", text or "")
    if fenced:
        candidates.append(fenced.group(1).strip())
    braces = re.search(r"\{[\s\S]*\}", text or "")
    if braces:
        candidates.append(braces.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (TypeError, json.JSONDecodeError):
            continue
        if isinstance(parsed, dict):
            return parsed

    raise AIServiceError(
        "Failed to parse AI response as JSON",
        details={"error_type": "parse_error", "response_preview": (text or "")[:500]},
    )


class BudgetAdvisor:
    """Runs the suggestion and planning prompts against Gemini."""

    TEMPERATURE = 0.7
    MAX_TOKENS = 2048

    def __init__(self, client=None, model: Optional[str] = None, api_key: Optional[str] = None):
        self._client = client
        self.model = model or config.MODEL
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise AIServiceError("Gemini API key not configured", details={"error_type": "config"})
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def _generate(self, prompt: str) -> str:
        client = self.client
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    temperature=self.TEMPERATURE,
                    max_output_tokens=self.MAX_TOKENS,
                ),
            )
        except Exception as e:
            logger.exception("Gemini API error")
            raise AIServiceError(f"Gemini API error: {e}", details={"error_type": "api_error"}) from e
        return response.text or ""

    async def _run(self, prompt: str, schema: type):
        payload = extract_json(await self._generate(prompt))
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            logger.warning("AI response did not match %s: %s", schema.__name__, e)
            raise AIServiceError(
                f"AI response did not match {schema.__name__}",
                details={"error_type": "schema_error"},
            ) from e

    async def get_budget_suggestions(self, data: BudgetSuggestionsInput) -> BudgetSuggestionsOutput:
        return await self._run(render_suggestions_prompt(data), BudgetSuggestionsOutput)

    async def generate_budget_plan(self, data: BudgetPlanInput) -> BudgetPlanOutput:
        return await self._run(render_plan_prompt(data), BudgetPlanOutput)


def suggestions_input(details: Iterable[CategoryWithDetails]) -> BudgetSuggestionsInput:
    return BudgetSuggestionsInput(categories=[
        CategoryData(name=d.name, spent=float(d.spent), budget=float(d.budget)) for d in details
    ])


def plan_input(
    total_budget: Decimal,
    categories: Iterable[Category],
    translate: Callable[[str], str] = lambda key: key,
) -> BudgetPlanInput:
    # category names go out in the user's language, looked up by lowercased name
    names = []
    for c in categories:
        label = translate(c.name.lower())
        names.append(PlanCategory(name=c.name if label == c.name.lower() else label))
    return BudgetPlanInput(total_budget=float(total_budget), categories=names)


def suggestions_by_category(output: BudgetSuggestionsOutput) -> dict[str, str]:
    return {s.category_name: s.suggestion for s in output.suggestions}


def plan_total(output: BudgetPlanOutput) -> Decimal:
    return sum((Decimal(str(item.amount)) for item in output.plan), Decimal(0))
