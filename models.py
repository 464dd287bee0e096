from flask_login import UserMixin
from datetime import datetime
from extensions import db

# Role names
SUPER_ADMIN = 'SUPER_ADMIN'
PRIEST = 'PRIEST'
SERVANT_PREP = 'SERVANT_PREP'
MENTOR = 'MENTOR'
STUDENT = 'STUDENT'
USER_ROLES = [SUPER_ADMIN, PRIEST, SERVANT_PREP, MENTOR, STUDENT]

# Attendance statuses
PRESENT = 'PRESENT'
LATE = 'LATE'
ABSENT = 'ABSENT'
EXCUSED = 'EXCUSED'
ATTENDANCE_STATUSES = [PRESENT, LATE, ABSENT, EXCUSED]

# Year levels; BOTH is only valid on exams
YEAR_1 = 'YEAR_1'
YEAR_2 = 'YEAR_2'
BOTH = 'BOTH'

LESSON_STATUSES = ['SCHEDULED', 'COMPLETED', 'CANCELLED']
ENROLLMENT_STATUSES = ['ACTIVE', 'GRADUATED', 'WITHDRAWN']


class User(db.Model, UserMixin):
    """
    Login account for every participant in the program: admins, priests,
    servants prep leaders, mentors and students.
    """
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"User('{self.username}', '{self.role}')"


class AcademicYear(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(20), nullable=False, unique=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_active = db.Column(db.Boolean, default=False)

    def __repr__(self):
        return f"AcademicYear('{self.name}')"


class ExamSection(db.Model):
    """Subject area used to group lessons and exams (Bible Studies, Dogma, ...)."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False, unique=True)
    display_name = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f"ExamSection('{self.name}')"


class Lesson(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    exam_section_id = db.Column(db.Integer, db.ForeignKey('exam_section.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    scheduled_date = db.Column(db.DateTime, nullable=False)
    # Exam sittings are scheduled as lessons but never count toward attendance
    is_exam_day = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.String(20), default='SCHEDULED', nullable=False)

    academic_year = db.relationship('AcademicYear', backref='lessons')
    exam_section = db.relationship('ExamSection', backref='lessons')

    def __repr__(self):
        return f"Lesson('{self.title}', {self.scheduled_date})"


class AttendanceRecord(db.Model):
    __table_args__ = (db.UniqueConstraint('student_id', 'lesson_id', name='uq_attendance_student_lesson'),)

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lesson.id'), nullable=False)
    status = db.Column(db.String(10), nullable=False)
    arrived_at = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    recorded_by_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    student = db.relationship('User', foreign_keys=[student_id], backref='attendance_records')
    lesson = db.relationship('Lesson', backref='attendance_records')

    def __repr__(self):
        return f"AttendanceRecord(Student: {self.student_id}, Lesson: {self.lesson_id}, Status: {self.status})"


class Exam(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    exam_section_id = db.Column(db.Integer, db.ForeignKey('exam_section.id'), nullable=False)
    year_level = db.Column(db.String(10), nullable=False, default=BOTH)
    exam_date = db.Column(db.DateTime, nullable=False)
    total_points = db.Column(db.Float, nullable=False, default=100)

    academic_year = db.relationship('AcademicYear', backref='exams')
    exam_section = db.relationship('ExamSection', backref='exams')

    def __repr__(self):
        return f"Exam(Section: {self.exam_section_id}, Date: {self.exam_date}, Level: {self.year_level})"


class ExamScore(db.Model):
    __table_args__ = (db.UniqueConstraint('exam_id', 'student_id', name='uq_exam_score_exam_student'),)

    id = db.Column(db.Integer, primary_key=True)
    exam_id = db.Column(db.Integer, db.ForeignKey('exam.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    score = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    graded_by_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    exam = db.relationship('Exam', backref='scores')
    student = db.relationship('User', foreign_keys=[student_id], backref='exam_scores')

    @property
    def percentage(self):
        """Score as a percentage of the exam's total points."""
        if not self.exam or not self.exam.total_points:
            return 0.0
        return self.score * 100 / self.exam.total_points

    def __repr__(self):
        return f"ExamScore(Exam: {self.exam_id}, Student: {self.student_id}, Score: {self.score})"


class StudentEnrollment(db.Model):
    """
    A student's place in the two-year program. One enrollment per student;
    year_level moves from YEAR_1 to YEAR_2 at the end of the first year.
    """
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, unique=True)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    year_level = db.Column(db.String(10), nullable=False, default=YEAR_1)
    status = db.Column(db.String(20), nullable=False, default='ACTIVE')
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    mentor_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    enrolled_at = db.Column(db.DateTime, default=datetime.utcnow)

    student = db.relationship('User', foreign_keys=[student_id], backref=db.backref('enrollment', uselist=False))
    mentor = db.relationship('User', foreign_keys=[mentor_id], backref='mentees')
    academic_year = db.relationship('AcademicYear', backref='enrollments')

    def __repr__(self):
        return f"StudentEnrollment(Student: {self.student_id}, Level: {self.year_level})"


class ActivityLog(db.Model):
    """
    Model for tracking user activities for auditing and security purposes.
    """
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)
    action = db.Column(db.String(100), nullable=False)
    details = db.Column(db.Text, nullable=True)
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.Text, nullable=True)
    success = db.Column(db.Boolean, default=True)
    error_message = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', backref='activity_logs', lazy=True)

    def __repr__(self):
        return f"ActivityLog(User: {self.user_id}, Action: {self.action}, Success: {self.success})"
