"""
Exam score aggregation for single students and for cohorts.

All averages are simple means of score percentages. A section or cohort
with no scores gets an average of None (or is left out), never 0.
"""

REQUIRED_AVERAGE = 75
REQUIRED_SECTION_MINIMUM = 60


def _mean(values):
    if not values:
        return None
    return sum(values) / len(values)


def group_percentages_by_section(scores):
    """Map section name to (section, [percentages]) in first-seen order."""
    grouped = {}
    for score in scores:
        section = score.exam.exam_section
        entry = grouped.setdefault(section.name, (section, []))
        entry[1].append(score.percentage)
    return grouped


def summarize_exams(scores, total_applicable_exams=None):
    """
    Per-section and overall exam averages for one student.

    Sections without scores are omitted and do not block
    ``allSectionsPassing``; a student with no scores at all has an overall
    average of None and is treated as meeting the requirement.
    """
    section_averages = []
    for name, (section, percentages) in group_percentages_by_section(scores).items():
        average = _mean(percentages)
        section_averages.append({
            'section': name,
            'displayName': section.display_name,
            'average': average,
            'scores': percentages,
            'passingMet': average >= REQUIRED_SECTION_MINIMUM,
        })

    overall_average = _mean([score.percentage for score in scores])

    return {
        'sectionAverages': section_averages,
        'overallAverage': overall_average,
        'overallAverageMet': overall_average is None or overall_average >= REQUIRED_AVERAGE,
        'allSectionsPassing': all(s['passingMet'] for s in section_averages),
        'requiredAverage': REQUIRED_AVERAGE,
        'requiredMinimum': REQUIRED_SECTION_MINIMUM,
        'examsTaken': len(scores),
        'totalApplicableExams': len(scores) if total_applicable_exams is None else total_applicable_exams,
    }


def _percentages_by_section_id(scores):
    by_section = {}
    for score in scores:
        by_section.setdefault(score.exam.exam_section_id, []).append(score.percentage)
    return by_section


def cohort_section_averages(scores, sections):
    """Class-wide average per section, plus the overall average across every score."""
    by_section = _percentages_by_section_id(scores)
    section_averages = []
    for section in sections:
        percentages = by_section.get(section.id, [])
        section_averages.append({
            'sectionId': section.id,
            'sectionName': section.name,
            'displayName': section.display_name,
            'average': _mean(percentages),
            'scoreCount': len(percentages),
        })
    return {
        'sectionAverages': section_averages,
        'overallAverage': _mean([score.percentage for score in scores]),
        'totalScores': len(scores),
    }


def exam_averages_by_year(scores, academic_years, sections):
    """Section averages per academic year, with a count-weighted overall per year."""
    by_year = {}
    for score in scores:
        by_year.setdefault(score.exam.academic_year_id, []).append(score)

    results = []
    for year in academic_years:
        by_section = _percentages_by_section_id(by_year.get(year.id, []))
        year_sections = []
        total = 0
        count = 0
        for section in sections:
            percentages = by_section.get(section.id, [])
            year_sections.append({
                'sectionId': section.id,
                'displayName': section.display_name,
                'average': _mean(percentages),
                'count': len(percentages),
            })
            total += sum(percentages)
            count += len(percentages)

        results.append({
            'yearId': year.id,
            'yearName': year.name,
            'isActive': year.is_active,
            'overallAverage': total / count if count else None,
            'sections': year_sections,
        })
    return results


def weakest_sections(scores, sections, limit=3):
    """Sections with at least one score, lowest average first."""
    by_section = _percentages_by_section_id(scores)
    scored = []
    for section in sections:
        percentages = by_section.get(section.id)
        if not percentages:
            continue
        scored.append({
            'sectionId': section.id,
            'displayName': section.display_name,
            'average': _mean(percentages),
            'count': len(percentages),
        })
    scored.sort(key=lambda s: s['average'])
    return scored[:limit]
