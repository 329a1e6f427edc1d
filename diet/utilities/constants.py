from typing import Final

# Calorie model
KCAL_PER_KG: Final[int] = 3500
BASE_BMR: Final[int] = 1500
BMR_AGE_THRESHOLD: Final[int] = 30
BMR_AGE_ADJUSTMENT: Final[int] = 100

# Fallback plan: share of the daily target per slot
FALLBACK_SHARES: Final[dict[str, float]] = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snack": 0.10,
}
FALLBACK_MEALS: Final[dict[str, dict]] = {
    "breakfast": {
        "foods": ["2 slices whole grain toast", "1 medium banana", "1 tbsp peanut butter"],
        "description": "Balanced breakfast with complex carbs and protein",
    },
    "lunch": {
        "foods": ["Mixed green salad", "Grilled chicken breast (100g)", "1 cup quinoa"],
        "description": "Protein-rich lunch with fiber and nutrients",
    },
    "dinner": {
        "foods": ["Grilled fish (150g)", "Steamed vegetables", "1 cup brown rice"],
        "description": "Light dinner with lean protein and vegetables",
    },
}
FALLBACK_SNACK: Final[dict] = {
    "name": "Greek yogurt with berries",
    "foods": ["1 cup Greek yogurt", "1/2 cup mixed berries"],
}

PROMPT_TEMPLATE: Final[str] = (
    """Create a detailed daily diet plan for a {age}-year-old person who wants {goal} from {current}kg to {target}kg in {weeks} weeks. They follow a {diet} diet and need approximately {calories} calories per day.

Please provide:
1. Daily calorie target: {calories}
2. Breakfast (with specific foods and portions)
3. Lunch (with specific foods and portions)
4. Dinner (with specific foods and portions)
5. 2-3 healthy snack options

For each meal, include:
- Specific food items with quantities
- Approximate calories per meal
- Nutritional benefits

Ensure the diet is:
- Balanced with proper macronutrients
- Suitable for {diet} preference
- Realistic and sustainable
- Culturally diverse and tasty

Format the response as a JSON object with this structure:
"""
)
DIET_PLAN_JSON_FORMAT: Final[str] = (
    """{
  "dailyCalories": number,
  "breakfast": {
    "foods": ["item 1", "item 2"],
    "calories": number,
    "description": "meal description"
  },
  "lunch": {
    "foods": ["item 1", "item 2"],
    "calories": number,
    "description": "meal description"
  },
  "dinner": {
    "foods": ["item 1", "item 2"],
    "calories": number,
    "description": "meal description"
  },
  "snacks": [
    {
      "name": "snack name",
      "foods": ["item 1"],
      "calories": number
    }
  ]
}"""
)

GENERATION_FAILED_DETAILS: Final[str] = "Failed to generate diet plan"
