import json
from datetime import timedelta

from services.graduation import evaluate_graduation, build_student_analytics


def _analytics(snapshot, enrollment, records=(), scores=(), exams=(), **kwargs):
    return build_student_analytics(enrollment, list(records), list(scores), list(exams), snapshot.now, **kwargs)


def test_eligibility_requires_every_condition():
    attendance = {'met': True}
    exams = {'overallAverageMet': True, 'allSectionsPassing': True}
    assert evaluate_graduation(attendance, exams) == {
        'eligible': True,
        'attendanceMet': True,
        'overallAverageMet': True,
        'allSectionsPassing': True,
    }

    assert evaluate_graduation({'met': False}, exams)['eligible'] is False
    assert evaluate_graduation(attendance, {'overallAverageMet': False, 'allSectionsPassing': True})['eligible'] is False
    assert evaluate_graduation(attendance, {'overallAverageMet': True, 'allSectionsPassing': False})['eligible'] is False


def test_new_student_is_eligible_with_no_data(snapshot):
    enrollment = snapshot.enrollment(1)

    analytics = _analytics(snapshot, enrollment)

    assert analytics['enrollment'] == {'yearLevel': 'YEAR_1', 'status': 'ACTIVE'}
    assert analytics['attendance']['percentage'] is None
    assert analytics['attendance']['met'] is True
    assert analytics['exams']['overallAverage'] is None
    assert analytics['exams']['overallAverageMet'] is True
    assert analytics['exams']['missingExams'] == []
    assert analytics['graduation']['eligible'] is True


def test_failing_section_makes_student_ineligible(snapshot):
    enrollment = snapshot.enrollment(1)
    bible = snapshot.section('BIBLE_STUDIES', 'Bible Studies')
    dogma = snapshot.section('DOGMA', 'Dogma')
    exams = [snapshot.exam(bible), snapshot.exam(bible), snapshot.exam(dogma)]
    scores = [snapshot.score(1, exams[0], 95), snapshot.score(1, exams[1], 90), snapshot.score(1, exams[2], 55)]
    records = snapshot.records(1, 'PRESENT', 'PRESENT', 'PRESENT', 'PRESENT')

    analytics = _analytics(snapshot, enrollment, records, scores, exams)

    assert analytics['exams']['overallAverageMet'] is True
    assert analytics['graduation'] == {
        'eligible': False,
        'attendanceMet': True,
        'overallAverageMet': True,
        'allSectionsPassing': False,
    }


def test_exam_day_attendance_is_ignored(snapshot):
    enrollment = snapshot.enrollment(1)
    records = snapshot.records(1, 'PRESENT', 'PRESENT') + snapshot.records(1, 'ABSENT', 'ABSENT', is_exam_day=True)

    analytics = _analytics(snapshot, enrollment, records)

    assert analytics['attendance']['totalLessons'] == 2
    assert analytics['attendance']['percentage'] == 100


def test_year_two_full_program_view_owes_year_one_exams(snapshot):
    enrollment = snapshot.enrollment(1, year_level='YEAR_2')
    section = snapshot.section()
    year_1_exam = snapshot.exam(section, year_level='YEAR_1')
    year_2_exam = snapshot.exam(section, year_level='YEAR_2')
    scores = [snapshot.score(1, year_1_exam, 50), snapshot.score(1, year_2_exam, 90)]
    exams = [year_1_exam, year_2_exam]

    full = _analytics(snapshot, enrollment, scores=scores, exams=exams)
    per_year = _analytics(snapshot, enrollment, scores=scores, exams=exams, carry_over=False)

    assert full['exams']['totalApplicableExams'] == 2
    assert full['exams']['examsTaken'] == 2
    assert full['exams']['overallAverage'] == 70
    assert per_year['exams']['totalApplicableExams'] == 1
    assert per_year['exams']['overallAverage'] == 90


def test_year_one_student_ignores_year_two_exams(snapshot):
    enrollment = snapshot.enrollment(1)
    section = snapshot.section()
    year_2_exam = snapshot.exam(section, year_level='YEAR_2')

    analytics = _analytics(snapshot, enrollment, exams=[year_2_exam])

    assert analytics['exams']['totalApplicableExams'] == 0
    assert analytics['exams']['missingExams'] == []


def test_missing_exams_only_lists_past_due(snapshot):
    enrollment = snapshot.enrollment(1)
    section = snapshot.section()
    past = snapshot.exam(section, days_from_now=-1)
    future = snapshot.exam(section, days_from_now=1)

    analytics = _analytics(snapshot, enrollment, exams=[past, future])

    assert [m['id'] for m in analytics['exams']['missingExams']] == [past.id]
    assert analytics['exams']['totalApplicableExams'] == 2
    assert analytics['exams']['examsTaken'] == 0


def test_remaining_lessons_adds_absences_allowed(snapshot):
    enrollment = snapshot.enrollment(1)
    records = snapshot.records(1, 'PRESENT', 'PRESENT', 'PRESENT', 'ABSENT')

    analytics = _analytics(snapshot, enrollment, records, remaining_lessons=4, all_lessons=6)

    assert analytics['attendance']['allLessons'] == 6
    # (3 + 4 - x) / 8 >= 0.75  =>  x <= 1
    assert analytics['attendance']['absencesAllowed'] == 1


def test_same_snapshot_gives_identical_output(snapshot):
    enrollment = snapshot.enrollment(1, year_level='YEAR_2')
    section = snapshot.section()
    exams = [snapshot.exam(section, year_level='YEAR_1'), snapshot.exam(section, days_from_now=-3)]
    scores = [snapshot.score(1, exams[0], 72.5)]
    records = snapshot.records(1, 'PRESENT', 'LATE', 'EXCUSED', 'ABSENT')

    first = _analytics(snapshot, enrollment, records, scores, exams)
    second = _analytics(snapshot, enrollment, records, scores, exams)

    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_exams_from_an_earlier_cohorts_year_are_not_missing(snapshot):
    earlier = snapshot.year('2023-2024', is_active=False, start_date=snapshot.now.date() - timedelta(days=730))
    current = snapshot.year('2025-2026', start_date=snapshot.now.date() - timedelta(days=150))
    section = snapshot.section()
    old_exam = snapshot.exam(section, year_level='YEAR_1', days_from_now=-700, academic_year_id=earlier.id)
    own_exam = snapshot.exam(section, year_level='YEAR_1', days_from_now=-3, academic_year_id=current.id)
    enrollment = snapshot.enrollment(1, academic_year_id=current.id)

    analytics = _analytics(snapshot, enrollment, exams=[old_exam, own_exam], academic_years=[earlier, current])

    assert analytics['exams']['totalApplicableExams'] == 1
    assert [m['id'] for m in analytics['exams']['missingExams']] == [own_exam.id]
