from decimal import Decimal
import pytest
from werkzeug.datastructures import MultiDict
from models.errors import InvalidInput
from utils.formatters import to_money, format_currency, format_percentage
from utils.validators import (
    coerce_decimal,
    parse_amount,
    parse_percentage,
    parse_payroll_form,
    parse_ctc_form,
    payroll_input_from_json,
    tax_input_from_json,
    ctc_input_from_json
)

@pytest.mark.parametrize('raw, reason', [
    ('', 'Required'),
    ('   ', 'Required'),
    (None, 'Required'),
    ('abc', 'Must be a number'),
    ('0', 'Must be positive'),
    ('-5', 'Must be positive'),
])
def test_parse_amount_errors(raw, reason):
    with pytest.raises(InvalidInput) as excinfo:
        parse_amount('basic_salary', raw)
    assert excinfo.value.field == 'basic_salary'
    assert excinfo.value.reason == reason

def test_parse_amount_values():
    assert parse_amount('basic_salary', ' 100000.50 ') == Decimal('100000.50')
    assert parse_amount('bonus', '0', allow_zero=True) == Decimal('0')
    with pytest.raises(InvalidInput) as excinfo:
        parse_amount('bonus', '-1', allow_zero=True)
    assert excinfo.value.reason == 'Must not be negative'

def test_parse_percentage():
    assert parse_percentage('epf', '8') == Decimal('8')
    assert parse_percentage('epf', '100') == Decimal('100')
    with pytest.raises(InvalidInput) as excinfo:
        parse_percentage('epf', '150')
    assert excinfo.value.reason == 'Must be between 0 and 100'

def test_coerce_decimal_keeps_float_readable():
    assert coerce_decimal('x', 0.1) == Decimal('0.1')
    assert coerce_decimal('x', Decimal('1.25')) == Decimal('1.25')

def test_parse_payroll_form():
    form = MultiDict([
        ('basic_salary', '100000'),
        ('incentive_id', 'bonus'),
        ('incentive_label', 'Bonus'),
        ('incentive_amount', '25000'),
        ('incentive_id', 'incentive-2'),
        ('incentive_label', ''),
        ('incentive_amount', ''),
    ])
    payroll_input, errors, rows = parse_payroll_form(form)

    assert errors == {}
    assert payroll_input.basic_salary == Decimal('100000')
    assert len(payroll_input.incentives) == 1
    assert payroll_input.incentives[0].identifier == 'bonus'
    assert payroll_input.incentives[0].amount == Decimal('25000')
    assert len(rows) == 2

def test_parse_payroll_form_collects_field_errors():
    form = MultiDict([
        ('basic_salary', '0'),
        ('incentive_id', 'bonus'),
        ('incentive_label', 'Bonus'),
        ('incentive_amount', '-500'),
    ])
    payroll_input, errors, rows = parse_payroll_form(form)

    assert payroll_input is None
    assert errors == {
        'basic_salary': 'Must be positive',
        'incentives[bonus]': 'Must not be negative'
    }
    assert rows == [{'id': 'bonus', 'label': 'Bonus', 'amount': '-500'}]

def test_parse_payroll_form_labels_unnamed_incentives():
    form = MultiDict([('basic_salary', '5000'), ('incentive_amount', '10')])
    payroll_input, errors, rows = parse_payroll_form(form)

    assert errors == {}
    assert payroll_input.incentives[0].identifier == 'incentive-1'
    assert payroll_input.incentives[0].label == 'Incentive 1'

def test_parse_ctc_form():
    ctc_input, errors = parse_ctc_form({'ctc': '100000', 'epf': '8', 'etf': '3', 'tax': '5'})
    assert errors == {}
    assert ctc_input.ctc == Decimal('100000')
    assert ctc_input.tax_percent == Decimal('5')

    ctc_input, errors = parse_ctc_form({'ctc': '', 'epf': '8', 'etf': '300', 'tax': 'x'})
    assert ctc_input is None
    assert errors == {'ctc': 'Required', 'etf': 'Must be between 0 and 100', 'tax': 'Must be a number'}

def test_payroll_input_from_json():
    payroll_input = payroll_input_from_json({
        'basic_salary': 100000,
        'incentives': [{'id': 'bonus', 'label': 'Bonus', 'amount': '25000'}, {'amount': 10}]
    })
    assert payroll_input.basic_salary == Decimal('100000')
    assert [i.identifier for i in payroll_input.incentives] == ['bonus', 'incentive-2']

@pytest.mark.parametrize('body, field', [
    (None, 'body'),
    ({}, 'basic_salary'),
    ({'basic_salary': 1, 'incentives': 'x'}, 'incentives'),
    ({'basic_salary': 1, 'incentives': [5]}, 'incentives[0]'),
    ({'basic_salary': 1, 'incentives': [{'id': 'b', 'amount': 'x'}]}, 'incentives[b]'),
])
def test_payroll_input_from_json_errors(body, field):
    with pytest.raises(InvalidInput) as excinfo:
        payroll_input_from_json(body)
    assert excinfo.value.field == field

def test_ctc_input_from_json():
    ctc_input = ctc_input_from_json({'ctc': 100000, 'epf': 8, 'etf': 3, 'tax': 5})
    assert ctc_input.epf_percent == Decimal('8')
    with pytest.raises(InvalidInput):
        ctc_input_from_json({'ctc': 100000})

def test_formatters():
    assert to_money(Decimal('8.005')) == Decimal('8.01')
    assert str(to_money(Decimal('125000'))) == '125000.00'
    assert format_currency(Decimal('117000'), symbol='Rs.') == 'Rs. 117,000.00'
    assert format_percentage(Decimal('0.08')) == '8.00%'

@pytest.mark.parametrize('raw', ['1e30', '1000000000000000', 10 ** 20])
def test_coerce_decimal_rejects_oversized_amounts(raw):
    with pytest.raises(InvalidInput) as excinfo:
        coerce_decimal('basic_salary', raw)
    assert excinfo.value.reason == 'Must be less than 1,000,000,000,000,000'

def test_coerce_decimal_accepts_tiny_and_zero_amounts():
    assert coerce_decimal('x', '0') == Decimal('0')
    assert coerce_decimal('x', '1e-30') == Decimal('1e-30')

def test_tax_input_from_json():
    assert tax_input_from_json({'gross_income': '233333'}) == Decimal('233333')
    for body in (None, [1], 'text'):
        with pytest.raises(InvalidInput) as excinfo:
            tax_input_from_json(body)
        assert excinfo.value.field == 'body'
