"""
Contract info: license and security contact
"""

from typing import Optional

from .contract import ContractBuilder
from .options import Info

TAG_SECURITY_CONTACT = "custom:security-contact"


def set_info(c: ContractBuilder, info: Optional[Info]) -> None:
    if info is None:
        return
    if info.security_contact:
        c.add_natspec_tag(TAG_SECURITY_CONTACT, info.security_contact)
    if info.license:
        c.license = info.license
