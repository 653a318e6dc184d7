"""Tests for the page handlers wired by apps/app.py."""

from co2_estimator.page import (
    HELPER_DEFAULT,
    HELPER_MANUAL,
    autofill_distance,
    submit,
)
from co2_estimator.services import GENERIC_FAILURE_MESSAGE


class TestAutofillDistance:
    def test_found_distance_is_read_only(self, service):
        state = autofill_distance(service, "São Paulo, SP", "Rio de Janeiro, RJ")

        assert state.distance_km == 430
        assert not state.editable
        assert "Distância encontrada automaticamente: 430 km" in state.helper_html

    def test_found_distance_uses_thousand_separator(self, service):
        state = autofill_distance(service, "São Paulo, SP", "Recife, PE")
        assert "2.650 km" in state.helper_html

    def test_manual_mode_keeps_value(self, service):
        state = autofill_distance(service, "São Paulo, SP", "Rio de Janeiro, RJ", True)

        assert state.keep_value
        assert state.editable
        assert HELPER_MANUAL in state.helper_html

    def test_missing_city_clears_field(self, service):
        state = autofill_distance(service, "", "Rio de Janeiro, RJ")

        assert state.distance_km is None
        assert not state.keep_value
        assert HELPER_DEFAULT in state.helper_html

    def test_not_found_shows_suggestions(self, service):
        state = autofill_distance(service, "Sao Paulo", "Santos, SP")

        assert state.distance_km is None
        assert "Distância não encontrada" in state.helper_html
        assert "Você quis dizer?" in state.helper_html
        assert "São Paulo, SP" in state.helper_html

    def test_not_found_between_known_cities(self, service):
        state = autofill_distance(service, "Santos, SP", "Campinas, SP")
        assert "Você quis dizer?" not in state.helper_html


class TestSubmit:
    def test_renders_all_sections(self, service):
        result = submit(service, "São Paulo, SP", "Rio de Janeiro, RJ", 430, "car")

        assert result.error is None
        assert "51,60" in result.results_html
        assert "Comparação" in result.comparison_html
        assert "0,0516" in result.credits_html

    def test_validation_error(self, service):
        result = submit(service, "São Paulo, SP", "", 430, "car")

        assert result.results_html == ""
        assert "preencha todos os campos" in result.error

    def test_zero_distance(self, service):
        result = submit(service, "A", "B", 0, "car")
        assert "maior que zero" in result.error

    def test_unknown_mode(self, service):
        result = submit(service, "A", "B", 10, "teleport")
        assert result.error == GENERIC_FAILURE_MESSAGE

    def test_delay_does_not_change_result(self, service, monkeypatch):
        import co2_estimator.page as page

        slept = []
        monkeypatch.setattr(page.time, "sleep", slept.append)

        delayed = submit(service, "A", "B", 100, "bus", delay_seconds=1.5)
        immediate = submit(service, "A", "B", 100, "bus")

        assert slept == [1.5]
        assert delayed == immediate

    def test_validates_form_once(self, service, monkeypatch):
        calls = []
        validate = service.validate_request

        def counting_validate(*args):
            calls.append(args)
            return validate(*args)

        monkeypatch.setattr(service, "validate_request", counting_validate)
        monkeypatch.setattr(service, "estimate_safe", None)

        result = submit(service, "A", "B", 100, "car")

        assert result.error is None
        assert len(calls) == 1

    def test_rendering_failure_is_generic(self, calculator, catalog):
        from co2_estimator.services import EstimatorService

        no_renderer = EstimatorService(calculator=calculator, catalog=catalog)
        result = submit(no_renderer, "A", "B", 1, "car")
        assert result.error == GENERIC_FAILURE_MESSAGE
