import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from diet.domain.DietPlan import DietPlan
from diet.domain.Goal import Goal


def generate_pdf_for_plan(goal: Goal, plan: DietPlan) -> bytes:
    """Generate a one-page PDF: Meal / Foods / Calories for the goal's diet plan."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    title = "Weight Loss" if goal.goal_type.value == "weight_loss" else "Weight Gain"
    elements = [
        Paragraph(f"{title} Diet Plan – {plan.daily_calories} kcal/day", styles["Title"]),
        Paragraph(
            f"{goal.current_weight}kg to {goal.target_weight}kg in {goal.duration_weeks} weeks",
            styles["Normal"],
        ),
        Spacer(1, 16),
    ]

    cell = styles["BodyText"]
    data = [["Meal", "Foods", "Calories"]]
    for slot, meal in plan.meals().items():
        foods = "<br/>".join(meal.foods)
        if meal.description:
            foods += f"<br/><i>{meal.description}</i>"
        data.append([slot.capitalize(), Paragraph(foods, cell), str(meal.calories)])
    for snack in plan.snacks:
        data.append([f"Snack: {snack.name}", Paragraph("<br/>".join(snack.foods), cell), str(snack.calories)])

    table = Table(data, repeatRows=1, colWidths=[120, 320, 80])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("VALIGN", (0,0), (-1,-1), "TOP"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    if plan.is_fallback:
        elements.append(Spacer(1, 12))
        elements.append(Paragraph("This is a standard plan; a personalised plan could not be generated.",
                                  styles["Italic"]))
    doc.build(elements)
    return buf.getvalue()
