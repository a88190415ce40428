from flask import Flask, render_template, request, jsonify, send_file, flash
from pathlib import Path
import sys, os
import logging

sys.path.insert(0, str(Path(__file__).parent / 'src'))

from models.errors import InvalidInput
from processors.tax_engine import compute_tax, describe_brackets
from processors.payroll_calculator import compute_payroll
from processors.ctc_calculator import compute_ctc
from processors.payslip_generator import PayslipGenerator
from utils.formatters import to_money, format_currency, format_percentage
from utils.validators import (
    parse_payroll_form,
    parse_ctc_form,
    payroll_input_from_json,
    tax_input_from_json,
    ctc_input_from_json
)
from config.settings import SECRET_KEY, TEMPLATE_DIR, LOG_LEVEL, DEBUG

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__, template_folder=str(TEMPLATE_DIR))
app.config['SECRET_KEY'] = SECRET_KEY
app.config['DEBUG'] = DEBUG
app.jinja_env.filters['currency'] = format_currency
app.jinja_env.filters['percentage'] = format_percentage

EMPTY_INCENTIVE_ROW = {'id': 'incentive-1', 'label': '', 'amount': ''}

def next_incentive_id(rows):
    """First ``incentive-N`` identifier not used by any row"""
    used = {row['id'] for row in rows}
    n = len(rows) + 1
    while f"incentive-{n}" in used:
        n += 1
    return f"incentive-{n}"

@app.errorhandler(InvalidInput)
def handle_invalid_input(error):
    """Reject a request whose data the calculator cannot accept"""
    logger.warning("Invalid input on %s: %s", request.path, error)
    return jsonify({
        'success': False,
        'message': error.reason,
        'field': error.field
    }), 400

# ============================================================================
# Routes
# ============================================================================

@app.route('/')
def index():
    """Payroll form"""
    return render_template('index.html', values={}, rows=[dict(EMPTY_INCENTIVE_ROW)], errors={}, result=None)

@app.route('/calculate', methods=['POST'])
def calculate():
    """Submit the payroll form, or add/remove an incentive row"""
    action = request.form.get('action', 'calculate')
    payroll_input, errors, rows = parse_payroll_form(request.form)
    values = {'basic_salary': request.form.get('basic_salary', '')}

    if action == 'add_incentive':
        rows = rows + [{'id': next_incentive_id(rows), 'label': '', 'amount': ''}]
        return render_template('index.html', values=values, rows=rows, errors={}, result=None)

    if action.startswith('remove:'):
        identifier = action.split(':', 1)[1]
        rows = [row for row in rows if row['id'] != identifier]
        return render_template('index.html', values=values, rows=rows, errors={}, result=None)

    if errors:
        return render_template('index.html', values=values, rows=rows, errors=errors, result=None), 422

    try:
        result = compute_payroll(payroll_input)
    except InvalidInput as e:
        errors = {e.field: e.reason}
        return render_template('index.html', values=values, rows=rows, errors=errors, result=None), 422

    flash("Salary calculated successfully!")
    return render_template('index.html', values=values, rows=rows, errors={}, result=result)

@app.route('/ctc', methods=['GET', 'POST'])
def ctc_page():
    """Cost-to-company form"""
    if request.method == 'GET':
        return render_template('ctc.html', values={}, errors={}, result=None)

    values = {name: request.form.get(name, '') for name in ('ctc', 'epf', 'etf', 'tax')}
    ctc_input, errors = parse_ctc_form(request.form)
    if errors:
        return render_template('ctc.html', values=values, errors=errors, result=None), 422

    result = compute_ctc(ctc_input)
    flash("Salary calculated successfully!")
    return render_template('ctc.html', values=values, errors={}, result=result)

# ============================================================================
# API Endpoints
# ============================================================================

@app.route('/api/tax-brackets')
def get_tax_brackets():
    """Get the progressive tax table"""
    return jsonify(describe_brackets())

@app.route('/api/tax', methods=['POST'])
def calculate_tax():
    """Tax on a gross income"""
    tax = compute_tax(tax_input_from_json(request.get_json(silent=True)))

    return jsonify({
        'success': True,
        'tax_amount': str(to_money(tax))
    })

@app.route('/api/payroll', methods=['POST'])
def calculate_payroll():
    """Full payroll breakdown"""
    payroll_input = payroll_input_from_json(request.get_json(silent=True))
    result = compute_payroll(payroll_input)

    return jsonify({
        'success': True,
        'result': result.to_dict()
    })

@app.route('/api/ctc', methods=['POST'])
def calculate_ctc():
    """Gross and net from cost to company"""
    ctc_input = ctc_input_from_json(request.get_json(silent=True))
    result = compute_ctc(ctc_input)

    return jsonify({
        'success': True,
        'result': result.to_dict()
    })

@app.route('/api/payslip', methods=['POST'])
def download_payslip():
    """Payroll breakdown as an Excel payslip"""
    data = request.get_json(silent=True)
    payroll_input = payroll_input_from_json(data)
    result = compute_payroll(payroll_input)

    employee_name = data.get('employee_name') or None
    buffer = PayslipGenerator().generate(payroll_input, result, employee_name=employee_name)
    logger.info("Payslip generated for %s", employee_name or "anonymous employee")

    return send_file(
        buffer,
        as_attachment=True,
        download_name='payslip.xlsx',
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'])
