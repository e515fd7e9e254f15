"""Donor field names, review labels and import column aliases."""

__all__ = [
    "WIRE_NAMES",
    "FIELD_NAMES",
    "FIELD_LABELS",
    "COLUMN_ALIASES",
    "resolve_column",
]

# Attribute name → wire (camelCase) name, in wire order
WIRE_NAMES: dict[str, str] = {
    "id": "id",
    "email": "email",
    "first_name": "firstName",
    "last_name": "lastName",
    "phone": "phone",
    "mobile": "mobile",
    "address": "address",
    "city": "city",
    "postal_code": "postalCode",
}

# Compared fields, in reporting order
FIELD_NAMES: tuple[str, ...] = (
    "email",
    "firstName",
    "lastName",
    "phone",
    "address",
    "postalCode",
)

FIELD_LABELS: dict[str, str] = {
    "email": "Email",
    "firstName": "First name",
    "lastName": "Last name",
    "phone": "Phone",
    "address": "Address",
    "postalCode": "Postal code",
}

# Lower-cased import header → record attribute. English and French headers
# as produced by the donor spreadsheet exports.
COLUMN_ALIASES: dict[str, str] = {
    "id": "id",
    "donor_id": "id",
    "donorid": "id",
    # names
    "firstname": "first_name",
    "first_name": "first_name",
    "first name": "first_name",
    "prénom": "first_name",
    "prenom": "first_name",
    "lastname": "last_name",
    "last_name": "last_name",
    "last name": "last_name",
    "nom": "last_name",
    # contact
    "email": "email",
    "e-mail": "email",
    "courriel": "email",
    "phone": "phone",
    "telephone": "phone",
    "téléphone": "phone",
    "mobile": "mobile",
    "cellulaire": "mobile",
    "cell": "mobile",
    # address
    "address": "address",
    "adresse": "address",
    "city": "city",
    "ville": "city",
    "postalcode": "postal_code",
    "postal_code": "postal_code",
    "postal code": "postal_code",
    "code_postal": "postal_code",
    "code postal": "postal_code",
    "zip": "postal_code",
}


def resolve_column(name: str) -> str | None:
    """Map an import header or wire key to a record attribute.

    Parameters
    ----------
    name : str
        Column header, wire key (``postalCode``) or attribute name.

    Returns
    -------
    str | None
        Record attribute name, or None for columns the engine ignores.
    """
    return COLUMN_ALIASES.get(name.strip().lower())
