#############################
# hrms/queries.py
# all SQL queries in app in one file (= called in app by needs)
# columns are aliased to the camelCase keys used by reports
#############################

#
# employees & positions
#
def report_employees_sql():
    return """
        SELECT e.id, e.name, e.position_id AS "positionId", e.email,
               e.joining_date AS "joiningDate", e.status
        FROM employees e
        ORDER BY e.name, e.id
    """


def report_positions_sql():
    return """
        SELECT p.id, p.title, p.monthly_salary AS "monthlySalary"
        FROM positions p
        ORDER BY p.title, p.id
    """


#
# attendance
#
def report_attendance_sql():
    return """
        SELECT a.date, a.employee_id AS "empId", e.name AS "employeeName",
               a.sign_in AS "signIn", a.sign_out AS "signOut", a.status
        FROM attendance a
        JOIN employees e ON e.id = a.employee_id
        WHERE a.date BETWEEN %s AND %s
        ORDER BY a.date, e.name
    """


#
# recruitment
#
def report_applicants_sql():
    return """
        SELECT ap.id, ap.name, ap.email, p.title AS "jobTitle",
               ap.application_date AS "applicationDate", ap.status
        FROM applicants ap
        LEFT JOIN positions p ON p.id = ap.position_id
        WHERE ap.application_date BETWEEN %s AND %s
        ORDER BY ap.application_date, ap.name
    """


#
# training
#
def report_training_program_sql():
    return """
        SELECT id, title, provider, description,
               start_date AS "startDate", end_date AS "endDate"
        FROM training_programs
        WHERE id = %s
    """


def report_enrollments_sql():
    return """
        SELECT en.id AS "enrollmentId", en.employee_id AS "empId", e.name AS "employeeName",
               en.status, en.progress
        FROM training_enrollments en
        JOIN employees e ON e.id = en.employee_id
        WHERE en.program_id = %s
        ORDER BY e.name
    """


#
# payroll
#
def report_payroll_runs_sql():
    return """
        SELECT id, period_start, period_end, status
        FROM payroll_runs
        ORDER BY period_start DESC
    """


def report_payroll_run_sql():
    return """
        SELECT id, period_start, period_end, status
        FROM payroll_runs
        WHERE id = %s
    """


def report_payroll_records_sql():
    return """
        SELECT r.run_id, r.employee_id AS "empId", e.name AS "employeeName",
               r.gross_earning AS "grossEarning", r.total_deductions AS "totalDeductionsAmount",
               r.net_pay AS "netPay", r.status
        FROM payroll_records r
        JOIN employees e ON e.id = r.employee_id
        WHERE r.run_id = ANY(%s)
        ORDER BY r.run_id, e.name
    """


def report_payroll_statutory_sql():
    return """
        SELECT s.run_id, s.employee_id AS "empId", s.requirement_type AS agency,
               s.employee_amount AS ee, s.employer_amount AS er
        FROM payroll_statutory s
        WHERE s.run_id = ANY(%s)
        ORDER BY s.run_id, s.employee_id, s.requirement_type
    """


#
# performance
#
def report_kras_sql():
    return """
        SELECT id, title, description
        FROM kras
        ORDER BY title, id
    """


def report_kpis_sql():
    return """
        SELECT id, kra_id AS "kraId", title, weight
        FROM kpis
        ORDER BY kra_id, id
    """
