"""AddressService 단위 테스트"""

import pytest

from delivery.services.address_service import AddressService
from delivery.services.base import AddressError
from delivery.utils.distance import Coordinates


class TestAddressServiceNormalize:
    """주소 정규화 우선순위"""

    def test_searched_address_first(self):
        # Arrange
        searched = {"postcode": "sw1a 1aa", "latitude": 51.5, "longitude": -0.14}

        # Act
        address = AddressService.normalize(searched_address=searched, user_address="EC1A 1BB")

        # Assert
        assert address.postcode == "SW1A 1AA"
        assert address.source == "searched"
        assert address.coordinates == Coordinates(lat=51.5, lng=-0.14)
        assert address.country == "GB"

    def test_searched_address_without_postcode_falls_back(self):
        address = AddressService.normalize(searched_address={"postcode": ""}, user_address="Flat 2, EC1A 1BB")

        assert address.postcode == "EC1A 1BB"
        assert address.source == "user_string"
        assert address.coordinates is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("10 Downing Street, London SW1A 2AA", "SW1A 2AA"),
            ("10 downing street london sw1a2aa", "SW1A 2AA"),
            ("Unit 4, M1 1AE Manchester", "M1 1AE"),
        ],
    )
    def test_postcode_extracted_from_string(self, text, expected):
        assert AddressService.normalize(user_address=text).postcode == expected

    def test_structured_address_with_postal_code(self):
        address = AddressService.normalize(
            user_address={"postalCode": "m1 1ae", "addressLine1": "Unit 4", "city": "Manchester"}
        )

        assert address.postcode == "M1 1AE"
        assert address.street == "Unit 4"
        assert address.city == "Manchester"
        assert address.country == "GB"
        assert address.source == "user_structured"

    def test_structured_address_keeps_country(self):
        address = AddressService.normalize(user_address={"postcode": "BT1 1AA", "country": "NI"})

        assert address.country == "NI"

    @pytest.mark.parametrize(
        "user_address",
        [None, "", "no postcode here", {"street": "Somewhere"}, {"postcode": "   "}],
    )
    def test_invalid_address(self, user_address):
        with pytest.raises(AddressError) as exc_info:
            AddressService.normalize(user_address=user_address)

        assert exc_info.value.code == "INVALID_ADDRESS"
        assert exc_info.value.details == {"addressSource": "none"}


class TestAddressPostcodeFormat:
    """형식이 잘못된 우편번호는 지오코딩 전에 거절"""

    @pytest.mark.parametrize("postcode", ["12345", "NOT A POSTCODE", "SW1A"])
    def test_invalid_structured_postcode(self, postcode):
        with pytest.raises(AddressError) as exc_info:
            AddressService.normalize(user_address={"postcode": postcode, "city": "London"})

        assert exc_info.value.code == "INVALID_ADDRESS"

    def test_invalid_searched_postcode_falls_back_to_user_address(self):
        address = AddressService.normalize(
            searched_address={"postcode": "12345", "latitude": 51.5, "longitude": -0.14},
            user_address={"postalCode": "EC1A 1BB"},
        )

        assert address.postcode == "EC1A 1BB"
        assert address.source == "user_structured"
        assert address.coordinates is None

    def test_invalid_searched_postcode_only(self):
        with pytest.raises(AddressError):
            AddressService.normalize(searched_address={"postcode": "garbage"})
