"""
Step definitions for DNS Zone Manager integration tests.
"""

from behave import given, when, then

from dns_zone_manager.core.dns_manager import DNSManager
from dns_zone_manager.core.record import parse_soa
from dns_zone_manager.exceptions import ApiError


def _live(context, name, record_type):
    return list(context.zone.records(name, record_type).all())


def _soa_serial(context):
    soa = _live(context, "@", "SOA")[0]
    return parse_soa(soa.data[0]).serial


def _submit(context, operation, *args, **kwargs):
    try:
        context.change = operation(*args, **kwargs)
    except ApiError as e:
        context.error = e
        context.change = None


@given("the DNS Zone Manager is configured with the mock provider")
def step_impl(context):
    """Configure the DNS Zone Manager with the mock provider."""
    context.dns_manager = DNSManager(context.test_config)
    context.provider = context.dns_manager.dns_client.provider
    assert context.dns_manager.dns_client is not None


@given("I have a test zone configured")
def step_impl(context):
    """Look up the zone seeded into the mock provider."""
    context.zone = context.dns_manager.zone(context.test_zone)
    assert context.zone is not None, f"Zone {context.test_zone} not found"
    assert context.zone.dns == context.test_dns


@given('the zone has a "{record_type}" record "{name}" with TTL {ttl:d} and data "{data}"')
def step_impl(context, record_type, name, ttl, data):
    """Create an existing record through the normal update path."""
    change = context.zone.add(name, record_type, ttl, data)
    assert change is not None


@given("the backend fails the next {count:d} calls with status {status:d}")
def step_impl(context, count, status):
    """Queue backend failures."""
    context.provider.fail_next(
        *[ApiError(status, f"Injected failure {n + 1}") for n in range(count)]
    )


@when('I add a "{record_type}" record "{name}" with TTL {ttl:d} and data "{data}"')
def step_impl(context, record_type, name, ttl, data):
    """Add a record."""
    _submit(context, context.zone.add, name, record_type, ttl, data)


@when('I add a "{record_type}" record "{name}" with TTL {ttl:d} and data "{data}" using SOA serial {serial:d}')
def step_impl(context, record_type, name, ttl, data, serial):
    """Add a record with a fixed SOA serial."""
    _submit(context, context.zone.add, name, record_type, ttl, data, soa_serial=serial)


@when('I replace the "{record_type}" record "{name}" with TTL {ttl:d} and data "{data}"')
def step_impl(context, record_type, name, ttl, data):
    """Replace the records matching name and type."""
    context.previous = _live(context, name, record_type)
    _submit(context, context.zone.replace, name, record_type, ttl, data)


@when('I remove the "{record_type}" record "{name}" skipping the SOA')
def step_impl(context, record_type, name):
    """Remove records without updating the SOA serial."""
    _submit(context, context.zone.remove, name, record_type, skip_soa=True)


@when("I submit a transaction with the following operations")
def step_impl(context):
    """Queue every row of the table in one transaction."""
    context.changes_before = len(context.provider.changes[context.test_zone])
    tx = context.zone.transaction()
    for row in context.table:
        if row["operation"] == "remove":
            tx.remove(row["name"], row["type"])
        else:
            tx.add_op(row["operation"], row["name"], row["type"], int(row["ttl"]), row["data"])
    _submit(context, tx.commit)


@then("the change should be submitted")
def step_impl(context):
    """Verify that a change was returned."""
    assert context.error is None, f"Unexpected error: {context.error}"
    assert context.change is not None, "No change was submitted"
    assert context.change.done(), f"Change status is {context.change.status}"


@then("no change should be submitted")
def step_impl(context):
    """Verify that nothing was sent to the backend."""
    assert context.error is None, f"Unexpected error: {context.error}"
    assert context.change is None, f"Unexpected change {context.change}"


@then('the change should delete the old "{record_type}" record "{name}"')
def step_impl(context, record_type, name):
    """Verify the change carries the previous record as a deletion."""
    for record in context.previous:
        assert record in context.change.deletions, f"{record} not deleted"


@then('the zone should have a "{record_type}" record "{name}" with data "{data}"')
def step_impl(context, record_type, name, data):
    """Verify a record exists with the given data."""
    records = _live(context, name, record_type)
    assert records, f"No {record_type} record for {name}"
    assert records[0].data == [data], f"Unexpected data {records[0].data}"


@then('the zone should not have a "{record_type}" record "{name}"')
def step_impl(context, record_type, name):
    """Verify no record matches name and type."""
    records = _live(context, name, record_type)
    assert not records, f"Unexpected records {records}"


@then("the SOA serial should be {serial:d}")
def step_impl(context, serial):
    """Verify the zone's SOA serial."""
    actual = _soa_serial(context)
    assert actual == serial, f"Expected SOA serial {serial}, got {actual}"


@then("the transaction should submit exactly {count:d} change")
def step_impl(context, count):
    """Verify how many changes the transaction produced."""
    assert context.error is None, f"Unexpected error: {context.error}"
    submitted = len(context.provider.changes[context.test_zone]) - context.changes_before
    assert submitted == count, f"Expected {count} changes, got {submitted}"


@then("the operation should fail with status {status:d}")
def step_impl(context, status):
    """Verify the backend error was surfaced unchanged."""
    assert context.error is not None, "Expected the operation to fail"
    assert context.error.status_code == status, f"Got status {context.error.status_code}"
