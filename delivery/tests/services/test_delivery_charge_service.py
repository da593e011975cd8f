"""DeliveryChargeService 단위 테스트"""

import logging
from decimal import Decimal

import pytest
from django.db import IntegrityError

from delivery.models import DeliveryCharge, DistanceCache
from delivery.services.base import AddressError, BranchConfigurationError, DistanceProviderError
from delivery.services.delivery_charge_service import BranchNotFoundError, DeliveryChargeService
from delivery.tests.conftest import FakeDistanceProvider
from delivery.tests.factories import (
    BranchFactory,
    DeliveryChargeFactory,
    PostcodeExclusionFactory,
    PriceOverrideFactory,
    TestConstants,
)
from delivery.utils.distance import Distance
from delivery.utils.google_maps import GoogleMapsError


@pytest.mark.django_db
class TestExclusion:
    """배달 제외 우편번호"""

    @pytest.mark.parametrize("order_total", [Decimal("1"), Decimal("15"), Decimal("500")])
    def test_excluded_postcode_always_rejected(self, branch, standard_bands, fake_provider, customer_coordinates, order_total):
        """제외 우편번호는 주문금액과 무관하게 배달 불가"""
        # Arrange
        PostcodeExclusionFactory(branch=branch, prefix="EC1A", postfix="1BB")

        # Act
        quote = DeliveryChargeService.resolve(
            branch.pk,
            order_total,
            postcode="ec1a1bb",
            customer=customer_coordinates,
            provider=fake_provider,
        )

        # Assert
        assert quote.deliverable is False
        assert quote.code == "POSTCODE_EXCLUDED"
        assert fake_provider.calls == []

    def test_prefix_only_exclusion_covers_district(self, branch, standard_bands):
        """prefix만 등록된 제외 규칙은 해당 지역 전체에 적용"""
        PostcodeExclusionFactory(branch=branch, prefix="E20", postfix="")

        quote = DeliveryChargeService.resolve(
            branch.pk, Decimal("15"), postcode="E20 2ST", distance=Distance.from_miles(1)
        )

        assert quote.deliverable is False
        assert quote.code == "POSTCODE_EXCLUDED"

    def test_inactive_exclusion_ignored(self, branch, standard_bands):
        """비활성 제외 규칙은 무시"""
        PostcodeExclusionFactory(branch=branch, prefix="E20", postfix="", is_active=False)

        quote = DeliveryChargeService.resolve(
            branch.pk, Decimal("15"), postcode="E20 2ST", distance=Distance.from_miles(1)
        )

        assert quote.deliverable is True

    def test_other_branch_exclusion_ignored(self, branch, standard_bands):
        """다른 지점의 제외 규칙은 적용되지 않음"""
        PostcodeExclusionFactory(prefix="E20", postfix="")

        quote = DeliveryChargeService.resolve(
            branch.pk, Decimal("15"), postcode="E20 2ST", distance=Distance.from_miles(1)
        )

        assert quote.deliverable is True


@pytest.mark.django_db
class TestPriceOverride:
    """우편번호 고정 배달비"""

    def test_override_applies_without_distance_lookup(self, branch, standard_bands, fake_provider, customer_coordinates):
        """주문금액 ≥ min_spend → 고정 배달비, 거리 계산 안 함"""
        # Arrange
        PriceOverrideFactory(branch=branch, prefix="EC1A", postfix="1BB", min_spend=Decimal("10"), charge=Decimal("1.50"))

        # Act
        quote = DeliveryChargeService.resolve(
            branch.pk,
            Decimal("10"),
            postcode="EC1A 1BB",
            customer=customer_coordinates,
            provider=fake_provider,
        )

        # Assert
        assert quote.deliverable is True
        assert quote.charge == Decimal("1.50")
        assert quote.type == "postcode_override"
        assert quote.postcode == "EC1A 1BB"
        assert fake_provider.calls == []
        assert DistanceCache.objects.count() == 0

    def test_override_below_min_spend_falls_through(self, branch, standard_bands, fake_provider, customer_coordinates):
        """주문금액 < min_spend → 거절이 아니라 거리 기반 배달비"""
        PriceOverrideFactory(branch=branch, prefix="EC1A", postfix="1BB", min_spend=Decimal("10"), charge=Decimal("1.50"))

        quote = DeliveryChargeService.resolve(
            branch.pk,
            Decimal("9.99"),
            postcode="EC1A 1BB",
            customer=customer_coordinates,
            provider=fake_provider,
        )

        assert quote.deliverable is True
        assert quote.type == "distance_based"
        assert quote.charge == Decimal("3")
        assert len(fake_provider.calls) == 1

    def test_exact_override_preferred_over_prefix_only(self, branch, standard_bands):
        """정확히 일치하는 규칙이 prefix 규칙보다 우선"""
        PriceOverrideFactory(branch=branch, prefix="EC1A", postfix="", min_spend=Decimal("0"), charge=Decimal("2.00"))
        PriceOverrideFactory(branch=branch, prefix="EC1A", postfix="1BB", min_spend=Decimal("0"), charge=Decimal("1.00"))

        exact = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="EC1A 1BB", distance=Distance.from_miles(1))
        district = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="EC1A 7BE", distance=Distance.from_miles(1))

        assert exact.charge == Decimal("1.00")
        assert district.charge == Decimal("2.00")
        assert district.postcode == "EC1A"

    def test_exclusion_takes_priority_over_override(self, branch, standard_bands):
        """제외 규칙이 고정 배달비보다 우선"""
        PriceOverrideFactory(branch=branch, prefix="EC1A", postfix="1BB", min_spend=Decimal("0"))
        PostcodeExclusionFactory(branch=branch, prefix="EC1A", postfix="1BB")

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="EC1A 1BB", distance=Distance.from_miles(1))

        assert quote.deliverable is False


@pytest.mark.django_db
class TestBandSelection:
    """거리 구간 선택"""

    def test_near_band_within_spend_range(self, branch, standard_bands):
        """4마일, £15 → 5마일 구간 £3"""
        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(4))

        assert quote.deliverable is True
        assert quote.charge == Decimal("3")
        assert quote.max_distance == Decimal("5")
        assert quote.max_spend == Decimal("20")

    def test_unbounded_max_spend(self, branch, standard_bands):
        """8마일, £15 → 10마일 구간 £5 (max_spend 0 = 상한 없음)"""
        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(8))

        assert quote.charge == Decimal("5")

    def test_outside_delivery_area(self, branch, standard_bands):
        """12마일 → 배달 지역 밖"""
        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(12))

        assert quote.deliverable is False
        assert quote.code == "OUTSIDE_DELIVERY_AREA"
        assert quote.max_distance == Decimal("10")
        assert "12.0 miles" in quote.message

    def test_spend_above_near_band_not_caught_by_far_band(self, branch, standard_bands):
        """4마일, £25 → 5마일 구간 금액 초과 (10마일 구간으로 넘어가지 않음)"""
        quote = DeliveryChargeService.resolve(branch.pk, Decimal("25"), postcode="SW1A 2AA", distance=Distance.from_miles(4))

        assert quote.deliverable is False
        assert quote.code == "MAXIMUM_SPEND_EXCEEDED"
        assert quote.code != "OUTSIDE_DELIVERY_AREA"

    def test_minimum_spend_not_met(self, branch):
        """최소 주문금액 미달 → minSpendRequired 포함"""
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("12"), charge=Decimal("2"))
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("10"), max_spend=Decimal("11.99"), charge=Decimal("4"))

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("8"), postcode="SW1A 2AA", distance=Distance.from_miles(2))

        assert quote.deliverable is False
        assert quote.code == "MINIMUM_SPEND_NOT_MET"
        assert quote.min_spend_required == Decimal("10")
        assert "£10.00" in quote.message

    def test_lowest_min_spend_wins_on_overlap(self, branch):
        """같은 구간에서 범위가 겹치면 min_spend가 낮은 규칙 우선"""
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("10"), charge=Decimal("1"))
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("0"), charge=Decimal("4"))

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("30"), postcode="SW1A 2AA", distance=Distance.from_miles(2))

        assert quote.charge == Decimal("4")

    def test_inactive_band_ignored(self, branch, standard_bands):
        """비활성 구간은 선택되지 않음"""
        DeliveryCharge.objects.filter(pk=standard_bands[0].pk).update(is_active=False)

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(4))

        assert quote.charge == Decimal("5")

    @pytest.mark.parametrize(
        "meters, deliverable",
        [
            (8000, True),  # 약 4.97마일
            (8046, True),
            (8050, False),  # 약 5.0003마일
        ],
    )
    def test_mile_to_meter_boundary(self, branch, meters, deliverable):
        """5마일 구간 경계는 미터로 변환해서 비교"""
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), charge=Decimal("3"))

        match = DeliveryChargeService.find_band(branch, Distance.from_meters(meters), Decimal("15"))

        assert (match.band is not None) is deliverable

    def test_distance_exactly_on_band_limit(self, branch):
        """입력 거리 = max_distance → 해당 구간"""
        DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), charge=Decimal("3"))

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(5))

        assert quote.deliverable is True

    def test_no_active_bands_is_configuration_error(self, branch):
        """활성 구간이 하나도 없으면 설정 오류"""
        DeliveryChargeFactory(branch=branch, is_active=False)

        with pytest.raises(BranchConfigurationError) as exc_info:
            DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(1))

        assert exc_info.value.code == "NO_DELIVERY_CHARGES"


@pytest.mark.django_db
class TestDistanceResolution:
    """좌표 기반 거리 조회"""

    def test_distance_quote_includes_display_fields(self, branch, standard_bands, customer_coordinates):
        """거리 기반 응답에 마일 표시값 포함"""
        provider = FakeDistanceProvider(meters=8000)

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), customer=customer_coordinates, provider=provider)
        data = quote.to_dict()

        assert data["deliverable"] is True
        assert data["distance"] == "4.97"
        assert data["distanceText"] == "4.97 mi"
        assert data["duration"] == 600
        assert data["maxDistance"] == Decimal("5")

    def test_cache_written_even_when_rejected(self, branch, standard_bands, customer_coordinates):
        """거리 계산 성공 시 배달 불가여도 캐시 저장"""
        provider = FakeDistanceProvider(meters=Distance.from_miles(20).meters)

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), customer=customer_coordinates, provider=provider)

        assert quote.deliverable is False
        assert DistanceCache.objects.count() == 1

    def test_branch_without_location(self, standard_bands, customer_coordinates, fake_provider):
        """지점 좌표 미설정 → 설정 오류"""
        branch = BranchFactory.without_location()
        DeliveryChargeFactory(branch=branch)

        with pytest.raises(BranchConfigurationError) as exc_info:
            DeliveryChargeService.resolve(branch.pk, Decimal("15"), customer=customer_coordinates, provider=fake_provider)

        assert exc_info.value.code == "BRANCH_LOCATION_MISSING"
        assert fake_provider.calls == []

    def test_known_distance_does_not_need_branch_location(self):
        """거리를 직접 받은 경우 지점 좌표 불필요"""
        branch = BranchFactory.without_location()
        DeliveryChargeFactory(branch=branch)

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(1))

        assert quote.deliverable is True

    def test_provider_failure(self, branch, standard_bands, customer_coordinates):
        """거리 공급자 실패 → DistanceProviderError"""
        provider = FakeDistanceProvider(error=GoogleMapsError(code="ZERO_RESULTS", message="No route"))

        with pytest.raises(DistanceProviderError):
            DeliveryChargeService.resolve(branch.pk, Decimal("15"), customer=customer_coordinates, provider=provider)

    def test_unknown_branch(self, db):
        with pytest.raises(BranchNotFoundError):
            DeliveryChargeService.resolve(999999, Decimal("15"), postcode="SW1A 2AA", distance=Distance.from_miles(1))


@pytest.mark.django_db
class TestCheckoutAddress:
    """체크아웃 주소 기반 계산"""

    def test_searched_address_with_coordinates_skips_geocoding(self, branch, standard_bands, fake_provider, mocker):
        """검색 주소에 좌표가 있으면 지오코딩 생략"""
        geocoder = mocker.Mock()

        quote = DeliveryChargeService.resolve(
            branch.pk,
            Decimal("15"),
            searched_address={
                "postcode": "ec1a 1bb",
                "latitude": TestConstants.CUSTOMER_LAT,
                "longitude": TestConstants.CUSTOMER_LNG,
            },
            user_address="Somewhere else, SW1A 2AA",
            provider=fake_provider,
            geocoder=geocoder,
        )

        assert quote.deliverable is True
        assert quote.address_source == "searched"
        assert quote.postcode == "EC1A 1BB"
        geocoder.geocode_postcode.assert_not_called()

    def test_user_string_address_is_geocoded(self, branch, standard_bands, fake_provider, mocker):
        """문자열 주소 → 우편번호 추출 후 지오코딩"""
        geocoder = mocker.Mock()
        geocoder.geocode_postcode.return_value = {
            "latitude": TestConstants.CUSTOMER_LAT,
            "longitude": TestConstants.CUSTOMER_LNG,
        }

        quote = DeliveryChargeService.resolve(
            branch.pk,
            Decimal("15"),
            user_address="1 St Martin's Le Grand, London ec1a1bb",
            provider=fake_provider,
            geocoder=geocoder,
        )

        assert quote.deliverable is True
        assert quote.address_source == "user_string"
        geocoder.geocode_postcode.assert_called_once_with("EC1A 1BB")

    def test_geocoding_failure(self, branch, standard_bands, fake_provider, mocker):
        """지오코딩 실패 → DistanceProviderError"""
        geocoder = mocker.Mock()
        geocoder.geocode_postcode.side_effect = GoogleMapsError(code="ZERO_RESULTS", message="Not found")

        with pytest.raises(DistanceProviderError) as exc_info:
            DeliveryChargeService.resolve(
                branch.pk,
                Decimal("15"),
                user_address={"postalCode": "EC1A 1BB"},
                provider=fake_provider,
                geocoder=geocoder,
            )

        assert exc_info.value.code == "GEOCODING_FAILED"
        assert fake_provider.calls == []

    def test_missing_address(self, branch, standard_bands):
        """우편번호를 얻을 수 없는 주소 → AddressError"""
        with pytest.raises(AddressError):
            DeliveryChargeService.resolve(branch.pk, Decimal("15"), user_address="no postcode here")

    def test_excluded_address_echoes_source(self, branch, standard_bands):
        """배달 불가 응답에도 addressSource 포함"""
        PostcodeExclusionFactory(branch=branch, prefix="EC1A", postfix="")

        quote = DeliveryChargeService.resolve(branch.pk, Decimal("15"), user_address={"postcode": "EC1A 1BB"})

        assert quote.to_dict()["addressSource"] == "user_structured"


@pytest.mark.django_db
class TestRuleManagement:
    """배달비 규칙 관리"""

    def test_find_overlapping_bands(self, branch, standard_bands):
        """같은 구간에서 금액 범위가 겹치는 규칙 감지"""
        # Arrange: 5마일 구간 £0~£20과 겹치는 £15~상한 없음
        new_band = DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("15"))

        # Act
        overlapping = DeliveryChargeService.find_overlapping_bands(new_band)

        # Assert
        assert overlapping == [standard_bands[0].pk]

    def test_adjacent_ranges_do_not_overlap(self, branch, standard_bands):
        new_band = DeliveryChargeFactory(branch=branch, max_distance=Decimal("5"), min_spend=Decimal("20.01"))

        assert DeliveryChargeService.find_overlapping_bands(new_band) == []

    def test_bulk_create(self, branch, manager_user):
        charges = [
            {"max_distance": Decimal("3"), "charge": Decimal("2")},
            {"max_distance": Decimal("6"), "min_spend": Decimal("10"), "charge": Decimal("4")},
        ]

        created = DeliveryChargeService.bulk_create(branch, manager_user, charges)

        assert len(created) == 2
        assert all(charge.created_by == manager_user for charge in created)

    def test_bulk_create_is_all_or_nothing(self, branch, manager_user):
        charges = [
            {"max_distance": Decimal("3"), "charge": Decimal("2")},
            {"max_distance": Decimal("6"), "charge": None},
        ]

        with pytest.raises(IntegrityError):
            DeliveryChargeService.bulk_create(branch, manager_user, charges)

        assert DeliveryCharge.objects.filter(branch=branch).count() == 0


@pytest.mark.django_db
class TestServiceCallLogging:
    """고객 위치 정보는 호출 로그에 남기지 않음"""

    def test_customer_location_masked(self, branch, standard_bands, fake_provider, customer_coordinates, caplog):
        caplog.set_level(logging.DEBUG, logger="delivery.services.base")

        DeliveryChargeService.resolve(
            branch.pk,
            Decimal("15"),
            postcode="EC1A 1BB",
            customer=customer_coordinates,
            provider=fake_provider,
        )

        start_logs = [record.getMessage() for record in caplog.records if "호출 시작" in record.getMessage()]
        assert start_logs
        assert all("EC1A" not in message for message in start_logs)
        assert all(str(TestConstants.CUSTOMER_LAT) not in message for message in start_logs)
