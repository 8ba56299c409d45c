"""
Publipostage : remplacement des champs {{...}} d'un modèle de message par les
données d'un élève, et construction du tableau de notes HTML.

Champs reconnus :
  {{student_first_name}}  {{student_last_name}}  {{student_full_name}}
  {{google_drive_url}}    {{grade_table}}

Le remplacement se fait en une seule passe : toutes les occurrences sont
remplacées, une valeur insérée n'est jamais ré-analysée, et un champ inconnu
({{foo}}) est laissé tel quel.
"""

import re
from typing import Iterable, Sequence

MERGE_FIELD_PATTERN = re.compile(r"\{\{(\w+)\}\}")

DRIVE_URL_UNAVAILABLE = "Not available"

_CELL_STYLE = "border: 1px solid #d1d5db; padding: 12px;"
_HEADER_STYLE = _CELL_STYLE + " text-align: left;"


def build_grade_table(grades: Iterable, assignments: Sequence) -> str:
    """
    Construit le tableau HTML des notes d'un élève.

    Une ligne par devoir ayant une note, dans l'ordre des devoirs fournis
    (date décroissante côté appelant). Les devoirs sans note sont omis.
    Retourne une chaîne vide si l'une des deux listes est vide.
    """
    grades_by_assignment = {g.assignment_id: g for g in grades}
    if not grades_by_assignment or not assignments:
        return ""

    rows = []
    for assignment in assignments:
        grade = grades_by_assignment.get(assignment.id)
        if grade is None:
            continue
        rows.append(
            "<tr>"
            f'<td style="{_CELL_STYLE}">{assignment.label}</td>'
            f'<td style="{_CELL_STYLE}">{_format_date(assignment.date)}</td>'
            f'<td style="{_CELL_STYLE}"><strong>{grade.grade}</strong></td>'
            "</tr>"
        )

    return (
        '<table style="border-collapse: collapse; width: 100%; margin: 20px 0;">'
        '<thead><tr style="background-color: #f3f4f6;">'
        f'<th style="{_HEADER_STYLE}">Assignment</th>'
        f'<th style="{_HEADER_STYLE}">Date</th>'
        f'<th style="{_HEADER_STYLE}">Grade</th>'
        "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def render(text: str, student, grade_table: str = "") -> str:
    """Remplace les champs de publipostage de `text` pour un élève."""
    values = {
        "student_first_name": student.first_name,
        "student_last_name": student.last_name,
        "student_full_name": f"{student.first_name} {student.last_name}",
        "google_drive_url": _drive_link(student.google_drive_url),
        "grade_table": grade_table,
    }

    def _replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return MERGE_FIELD_PATTERN.sub(_replace, text)


def _drive_link(url) -> str:
    if not url:
        return DRIVE_URL_UNAVAILABLE
    return f'<a href="{url}" style="color: #2563eb; text-decoration: underline;">{url}</a>'


def _format_date(value) -> str:
    # Format M/J/AAAA, sans zéro initial
    if hasattr(value, "strftime"):
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)
