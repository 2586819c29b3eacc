"""Instruction templates for the completion service."""

from skill_sprint.models.profile import CareerIntent

PROFILE_PROMPT = """\
Analyze this professional profile text for a user whose career intent is "{intent}".
Extract their current top 5 skills and suggest a general recommended career path \
in 1 short sentence.
"""

RECOMMEND_PROMPT = """\
Given a user with current skills: [{skills}], aiming to "{intent}" in a path like "{path}".
Recommend exactly 3 distinct, high-impact, modern skills they should learn next \
in a 14-day sprint.
They should be beginner-friendly enough to start, but deep enough to master later.
"""

PROJECTS_PROMPT = """\
Create a 14-day learning sprint for the skill: "{skill}".
Generate exactly 3 mini-projects that increase in difficulty.
Project 1 is due Day 3 (Easy), Project 2 due Day 8 (Medium), Project 3 due Day 14 (Hard).
Ensure deliverables can be submitted as text (e.g., code snippets, short essays, \
links to designs).
"""

GRADE_PROMPT = """\
Act as an expert mentor in {skill}. Grade this student submission.
Project Goal: {goal}
Student Submission: "{submission}"

Be encouraging but fair. If it's gibberish, give a low score.
"""


def build_profile_prompt(intent: CareerIntent) -> str:
    return PROFILE_PROMPT.format(intent=intent.value)


def build_profile_context(resume_text: str) -> str:
    return f"PROFILE TEXT:\n{resume_text}"


def build_recommend_prompt(
    current_skills: list[str], intent: CareerIntent, path: str
) -> str:
    return RECOMMEND_PROMPT.format(
        skills=", ".join(current_skills), intent=intent.value, path=path
    )


def build_projects_prompt(skill_name: str) -> str:
    return PROJECTS_PROMPT.format(skill=skill_name)


def build_grade_prompt(goal: str, submission: str, skill_name: str) -> str:
    return GRADE_PROMPT.format(skill=skill_name, goal=goal, submission=submission)
