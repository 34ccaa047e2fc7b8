# ─────────────────────────────────────────────────────────────────────────────
# Tests — Configuration builders
# ─────────────────────────────────────────────────────────────────────────────

import pytest
from pydantic import ValidationError

from structlog_cloudlogging.config import (
    Config,
    SamplingConfig,
    new_development_config,
    new_production_config,
)
from structlog_cloudlogging.encoder_config import (
    SOURCE_LOCATION_KEY,
    EncoderConfig,
    new_development_encoder_config,
    new_production_encoder_config,
)
from structlog_cloudlogging.fields import Encoding, encode_duration, encode_source_location, encode_timestamp
from structlog_cloudlogging.levels import Level, encode_severity


class TestProductionConfig:
    def test_values(self):
        config = new_production_config()
        assert config.level is Level.INFO
        assert config.development is False
        assert config.sampling == SamplingConfig(initial=100, thereafter=100)
        assert config.encoding is Encoding.json
        assert config.output_paths == ("stderr",)
        assert config.error_output_paths == ("stderr",)

    def test_stacktrace_from_error(self):
        assert new_production_config().stacktrace_level is Level.ERROR


class TestDevelopmentConfig:
    def test_values(self):
        config = new_development_config()
        assert config.level is Level.DEBUG
        assert config.development is True
        assert config.stacktrace_level is Level.WARN

    def test_differs_from_production_only_in_level_and_mode(self):
        prod, dev = new_production_config(), new_development_config()
        differing = {name for name in Config.model_fields if getattr(prod, name) != getattr(dev, name)}
        assert differing == {"level", "development"}


class TestBuilderPurity:
    @pytest.mark.parametrize("build", [new_production_config, new_development_config])
    def test_idempotent(self, build):
        first, second = build(), build()
        assert first == second
        assert first is not second

    @pytest.mark.parametrize("build", [new_production_config, new_development_config])
    def test_initial_fields_cannot_be_mutated(self, build):
        config = build()
        with pytest.raises(TypeError):
            config.initial_fields["service"] = "api"  # type: ignore[index]
        assert build().initial_fields == ()

    @pytest.mark.parametrize("build", [new_production_config, new_development_config])
    def test_hashable(self, build):
        assert hash(build()) == hash(build())

    def test_initial_fields_from_mapping(self):
        config = Config(initial_fields={"service": "api", "region": "eu"})
        assert config.initial_fields == (("service", "api"), ("region", "eu"))
        assert hash(config) == hash(Config(initial_fields={"service": "api", "region": "eu"}))

    def test_frozen(self):
        config = new_production_config()
        with pytest.raises(ValidationError):
            config.level = Level.DEBUG  # type: ignore[misc]


class TestEncoderConfig:
    def test_field_names(self):
        enc = new_production_encoder_config()
        assert enc.message_key == "message"
        assert enc.level_key == "severity"
        assert enc.time_key == "timestamp"
        assert enc.name_key == "logger"
        assert enc.caller_key == SOURCE_LOCATION_KEY == "logging.googleapis.com/sourceLocation"
        assert enc.function_key is None
        assert enc.stacktrace_key == "stacktrace"
        assert enc.line_ending == "\n"

    def test_encoders(self):
        enc = new_production_encoder_config()
        assert enc.encode_level is encode_severity
        assert enc.encode_time is encode_timestamp
        assert enc.encode_caller is encode_source_location
        assert enc.encode_duration is encode_duration

    def test_shared_between_modes(self):
        assert new_production_encoder_config() == new_development_encoder_config()
        assert new_production_config().encoder_config == new_development_config().encoder_config


class TestConfigValidation:
    def test_level_by_name(self):
        assert Config(level="warning").level is Level.WARN

    def test_level_by_number(self):
        assert Config(level=40).level is Level.ERROR

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            Config(level="verbose")

    def test_negative_sampling_rejected(self):
        with pytest.raises(ValidationError):
            SamplingConfig(initial=-1, thereafter=100)

    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError):
            Config(encoding="xml")

    def test_encoder_config_must_be_instance(self):
        with pytest.raises(ValidationError):
            Config(encoder_config={"message_key": "msg"})

    def test_custom_encoder_config(self):
        config = Config(encoder_config=EncoderConfig(message_key="msg"))
        assert config.encoder_config.message_key == "msg"

    def test_sampling_can_be_disabled(self):
        assert Config(sampling=None).sampling is None
