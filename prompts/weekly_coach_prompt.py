"""Weekly Coaching Message Prompt."""

from langchain_core.prompts import PromptTemplate

# (header, minimum words, required analysis), in the order they must appear
WEEKLY_SECTIONS = (
    (
        "Food Diary Feedback",
        "150-250",
        "Review nutrition patterns against their goal: logging consistency, days that stand out as well "
        "over or under target, protein/carb/fat balance, and specific goal-aligned recommendations.",
    ),
    (
        "Water Intake Feedback",
        "75-125",
        "Review daily water intake against their water goal, note consistency across the week and give one "
        "or two practical hydration habits.",
    ),
    (
        "Workout Log Feedback",
        "150-200",
        "Compare completed workouts with their weekly goal, comment on how sessions were distributed across "
        "the week, and recommend training adjustments that fit their goal type.",
    ),
    (
        "Cardio Log Feedback",
        "100-150",
        "Review cardio frequency, duration and intensity against their cardio goal and explain how it "
        "supports (or holds back) their goal type.",
    ),
    (
        "Daily Checkin Feedback",
        "200-300",
        "Synthesise the daily checkins: weight trend relative to their goal, steps, sleep, training and "
        "calorie adherence, correlations between metrics, and the strongest and weakest days.",
    ),
    (
        "Weekly Checkin Feedback",
        "200-250",
        "Respond to each weekly reflection answer (appetite, energy, workouts, digestion, proudest "
        "achievement, hardest part, social events, confidence, next week's schedule, habit to improve) and "
        "connect each to the logged data.",
    ),
    (
        "Overall Feedback",
        "150-200",
        "Summarise the top 3-4 wins, the 2-3 main focus areas for next week, progress toward their primary "
        "goal, a 3-5 step action plan for next week, and end with personal encouragement.",
    ),
)

WEEKLY_COACH_PROMPT = PromptTemplate.from_template(
    """You are the AI Coach "{coach_name}".{preamble}

CRITICAL: The client's primary goal is "{goal_type}". Tailor ALL feedback to support this goal.

EXPERIENCE LEVEL GUIDANCE:
{experience_instructions}

COACHING INTENSITY:
{intensity_instructions}

Provide thoughtful, personalised analysis with actionable insights. Focus on patterns, trends and qualitative
observations; use the numbers to inform your feedback but communicate naturally rather than listing figures.

Analyze the following weekly data from your client:

{formatted_data}

MESSAGE STRUCTURE - follow this exact order:

Begin with a warm greeting of 2-3 sentences that references the week being reviewed. Do NOT put a header
above the greeting.

Then write these sections, each under its own markdown header (## Header Name), each meeting its minimum
word count:

{section_instructions}

OUTPUT FORMAT:
Respond with strict JSON only, no text before or after it, in the form
{{"subject": "<short subject line>", "body": "<the full message>"}}
The body starts with the greeting, then the sections above with blank lines between them."""
)


def render_section_instructions() -> str:
    """Numbered section list for the weekly message contract."""
    return "\n\n".join(
        f"{index}. ## {header} ({words} words minimum)\n   {analysis}"
        for index, (header, words, analysis) in enumerate(WEEKLY_SECTIONS, start=1)
    )
