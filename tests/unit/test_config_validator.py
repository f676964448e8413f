"""
Unit tests for configuration validation system.
"""

import json

import pytest
import yaml

from streamscaler.config.validator import (
    AutoScalerConfigValidator,
    EvaluationConfigValidator,
    MetricsSnapshotValidator,
    validate_and_load_config,
)


def valid_config():
    return {
        'autoscaler': {
            'job.autoscaler.target.utilization': 0.8,
            'job.autoscaler.catch-up.duration': '10 min',
            'job.autoscaler.restart.time': '1 min',
        },
        'vertices': {
            'source': {
                'CATCH_UP_DATA_RATE': {'current': 100.0},
                'TARGET_DATA_RATE': {'current': 190.0, 'average': 200.0},
            }
        },
    }


class TestAutoScalerConfigValidator:
    """Test autoscaler option validation."""

    def test_valid_options(self):
        errors = AutoScalerConfigValidator.validate(valid_config()['autoscaler'])
        assert errors == []

    def test_invalid_duration(self):
        errors = AutoScalerConfigValidator.validate({'job.autoscaler.restart.time': '-1 min'})
        assert len(errors) == 1
        assert 'job.autoscaler.restart.time' in errors[0]

    def test_non_numeric_utilization(self):
        errors = AutoScalerConfigValidator.validate({'job.autoscaler.target.utilization': 'high'})
        assert any('expected a number' in e for e in errors)

    def test_out_of_range_utilization_is_warning_only(self, caplog):
        errors = AutoScalerConfigValidator.validate({'job.autoscaler.target.utilization': 1.5})
        assert errors == []
        assert 'will be clamped' in caplog.text

    def test_unknown_option_is_ignored(self, caplog):
        errors = AutoScalerConfigValidator.validate({'job.autoscaler.unknown': 1})
        assert errors == []
        assert 'unknown autoscaler option' in caplog.text

    def test_out_of_range_duration(self):
        errors = AutoScalerConfigValidator.validate({'job.autoscaler.restart.time': '9999999999 d'})
        assert len(errors) == 1
        assert 'out of range' in errors[0]

    def test_non_mapping(self):
        errors = AutoScalerConfigValidator.validate(['job.autoscaler.restart.time'])
        assert len(errors) == 1


class TestMetricsSnapshotValidator:
    """Test metrics snapshot validation."""

    def test_empty_vertices(self):
        errors = MetricsSnapshotValidator.validate({})
        assert any('non-empty' in e for e in errors)

    def test_missing_required_metric(self):
        errors = MetricsSnapshotValidator.validate({
            'source': {'CATCH_UP_DATA_RATE': {'current': 1.0}}
        })
        assert any('TARGET_DATA_RATE' in e for e in errors)

    def test_unknown_metric(self):
        vertices = valid_config()['vertices']
        vertices['source']['BOGUS_RATE'] = {'current': 1.0}
        errors = MetricsSnapshotValidator.validate(vertices)
        assert any('unknown metrics' in e for e in errors)

    def test_unexpected_value_fields(self):
        vertices = valid_config()['vertices']
        vertices['source']['TARGET_DATA_RATE']['median'] = 3.0
        errors = MetricsSnapshotValidator.validate(vertices)
        assert any('unexpected fields' in e for e in errors)


    def test_non_numeric_value(self):
        vertices = valid_config()['vertices']
        vertices['source']['CATCH_UP_DATA_RATE']['current'] = 'fast'
        errors = MetricsSnapshotValidator.validate(vertices)
        assert len(errors) == 1
        assert 'CATCH_UP_DATA_RATE.current must be a number' in errors[0]

    def test_null_values_allowed(self):
        vertices = valid_config()['vertices']
        vertices['source']['TARGET_DATA_RATE']['current'] = None
        assert MetricsSnapshotValidator.validate(vertices) == []


class TestEvaluationConfigValidator:
    """Test complete configuration validation."""

    def test_valid_config(self):
        is_valid, errors = EvaluationConfigValidator.validate(valid_config())
        assert is_valid
        assert errors == []

    def test_autoscaler_section_optional(self):
        config = valid_config()
        del config['autoscaler']
        is_valid, _ = EvaluationConfigValidator.validate(config)
        assert is_valid

    def test_missing_vertices(self):
        is_valid, errors = EvaluationConfigValidator.validate({'autoscaler': {}})
        assert not is_valid
        assert 'vertices' in errors[0]


class TestValidateAndLoadConfig:
    """Test loading from files."""

    @pytest.mark.parametrize("suffix,dump", [('.yaml', yaml.dump), ('.json', json.dumps)])
    def test_load_formats(self, tmp_path, suffix, dump):
        path = tmp_path / f"config{suffix}"
        path.write_text(dump(valid_config()))

        is_valid, errors, config = validate_and_load_config(str(path))
        assert is_valid
        assert errors == []
        assert config['vertices']['source']['TARGET_DATA_RATE']['average'] == 200.0

    def test_invalid_file_reports_errors(self, tmp_path):
        config = valid_config()
        config['autoscaler']['job.autoscaler.catch-up.duration'] = 'later'
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(config))

        is_valid, errors, _ = validate_and_load_config(str(path))
        assert not is_valid
        assert len(errors) == 1
