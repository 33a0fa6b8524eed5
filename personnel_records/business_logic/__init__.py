# personnel_records/business_logic/__init__.py
# Managers are imported from their modules; the repositories import the
# entities subpackage, so importing managers here would be circular.
