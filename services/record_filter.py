"""
Select the records that the analytics engine is allowed to count.

Exam-day lessons are exam sittings, not instruction, so their attendance
never counts. Exams are matched to students by year level, with BOTH exams
applying to everyone.
"""

from models import YEAR_1, YEAR_2, BOTH

EXAM_LEVELS_BY_YEAR = {
    YEAR_1: (YEAR_1, BOTH),
    YEAR_2: (YEAR_2, BOTH),
}


def countable_records(records):
    """Drop records taken on exam days."""
    return [record for record in records if record.lesson is None or not record.lesson.is_exam_day]


def partition_by_academic_year(records):
    """Group attendance records by their lesson's academic year, keeping input order."""
    by_year = {}
    for record in records:
        by_year.setdefault(record.lesson.academic_year_id, []).append(record)
    return by_year


def exams_for_year_level(exams, year_level):
    """Exams a student of ``year_level`` sits in that year."""
    levels = EXAM_LEVELS_BY_YEAR.get(year_level, (BOTH,))
    return [exam for exam in exams if exam.year_level in levels]


def partition_exams_by_year_level(exams):
    """Split exams into the YEAR_1 and YEAR_2 lists; BOTH exams land in each."""
    return {
        YEAR_1: exams_for_year_level(exams, YEAR_1),
        YEAR_2: exams_for_year_level(exams, YEAR_2),
    }


def applicable_exams(exams, year_level, carry_over=False):
    """
    Exams a student is expected to have taken.

    With ``carry_over`` a YEAR_2 student also owes every YEAR_1 exam, which is
    what full-program graduation readiness needs. Per-year analytics leave it
    off and only see the student's own level.
    """
    if carry_over and year_level == YEAR_2:
        return [exam for exam in exams if exam.year_level in (YEAR_1, YEAR_2, BOTH)]
    return exams_for_year_level(exams, year_level)


def previous_academic_year_id(academic_years, academic_year_id):
    """Id of the academic year that started just before ``academic_year_id``, or None."""
    ordered = sorted(academic_years, key=lambda year: year.start_date)
    ids = [year.id for year in ordered]
    if academic_year_id not in ids:
        return None
    index = ids.index(academic_year_id)
    return ids[index - 1] if index > 0 else None


def enrollment_exams(exams, enrollment, academic_years, carry_over=False):
    """
    Exams an enrollment owes, limited to the academic years it covers.

    The enrollment's own year contributes the exams for its current level.
    With ``carry_over`` a YEAR_2 student also owes the YEAR_1 exams of the
    year before. Exams from other cohorts' years are never owed.
    """
    current_levels = EXAM_LEVELS_BY_YEAR.get(enrollment.year_level, (BOTH,))
    previous_year_id = None
    if carry_over and enrollment.year_level == YEAR_2:
        previous_year_id = previous_academic_year_id(academic_years, enrollment.academic_year_id)

    def owed(exam):
        if exam.academic_year_id == enrollment.academic_year_id:
            return exam.year_level in current_levels
        return (previous_year_id is not None and exam.academic_year_id == previous_year_id
                and exam.year_level in EXAM_LEVELS_BY_YEAR[YEAR_1])

    return [exam for exam in exams if owed(exam)]


def scores_for_exams(scores, exams):
    """Keep only the scores recorded against one of ``exams``."""
    exam_ids = {exam.id for exam in exams}
    return [score for score in scores if score.exam.id in exam_ids]
