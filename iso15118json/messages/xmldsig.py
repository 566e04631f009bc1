"""
Data types of the XML signature block that the header of a V2G message may
carry, see section 8.3.3 of ISO 15118-20 and https://www.w3.org/TR/xmldsig-core1/

Only the structure is modelled here. Creating and verifying the signature
happens elsewhere, the values travel as opaque (Base64 encoded) bytes.
"""
from typing import Optional

from pydantic import Field, HttpUrl

from iso15118json.messages import BaseModel
from iso15118json.messages.bounded import bounded_list


class Transform(BaseModel):
    algorithm: HttpUrl = Field(..., alias="algorithm")


class DigestMethod(BaseModel):
    algorithm: HttpUrl = Field(..., alias="algorithm")


class SignatureMethod(BaseModel):
    algorithm: HttpUrl = Field(..., alias="algorithm")


class CanonicalizationMethod(BaseModel):
    algorithm: HttpUrl = Field(..., alias="algorithm")


class Reference(BaseModel):
    """
    Points to the element of the message body that is signed, e.g. the
    complete AuthorizationReq via its Id attribute:

        "references": [{
            "uri": "#ID1",
            "transforms": [{"algorithm": "http://www.w3.org/TR/canonical-exi/"}],
            "digestMethod": {"algorithm": "http://www.w3.org/2001/04/xmlenc#sha256"},
            "digestValue": "0bXgPQBlvuVrMXmERTBR61TKGPwOCRYXT4s8d6mPSqk="
        }]

    Only a single transform algorithm may be given ([V2G20-771]).
    """

    transforms: bounded_list(Transform, 1, min_items=1) = Field(
        ..., alias="transforms"
    )
    digest_method: DigestMethod = Field(..., alias="digestMethod")
    digest_value: bytes = Field(..., alias="digestValue")
    # Attributes of the XML element
    id: Optional[str] = Field(None, alias="id")
    uri: Optional[str] = Field(None, alias="uri")


class SignedInfo(BaseModel):
    """
    A signature must not reference more than 4 signed elements ([V2G20-909]),
    so the otherwise unbounded reference list is capped at 4.
    """

    canonicalization_method: CanonicalizationMethod = Field(
        ..., alias="canonicalizationMethod"
    )
    signature_method: SignatureMethod = Field(..., alias="signatureMethod")
    references: bounded_list(Reference, 4, min_items=1) = Field(
        ..., alias="references"
    )


class Signature(BaseModel):
    signed_info: SignedInfo = Field(..., alias="signedInfo")
    signature_value: bytes = Field(..., alias="signatureValue")


class X509IssuerSerial(BaseModel):
    x509_issuer_name: str = Field(..., alias="x509IssuerName")
    x509_serial_number: int = Field(..., ge=0, alias="x509SerialNumber")
