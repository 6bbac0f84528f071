from .overlaps import explain_overlap, find_overlaps, overlaps
from .reference import GrantValidationError, PrivilegeReference, load_reference, validate_grant
