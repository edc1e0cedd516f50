"""
Submission assembler.

Validates a draft and turns it into the transaction + items payload for
the persistence boundary. Totals are recomputed here from prices and
quantities; the draft's cached line totals are never trusted.
"""

from invoicedesk.config import get_logger
from invoicedesk.core.entities.invoice_draft import InvoiceDraft
from invoicedesk.core.entities.line_item import (
    ZERO,
    LineItem,
    parse_amount,
    parse_decimal,
    to_decimal_string,
)
from invoicedesk.core.entities.transaction import (
    TransactionItemRecord,
    TransactionRecord,
    TransactionSubmission,
)
from invoicedesk.core.entities.validation import FieldError
from invoicedesk.core.exceptions import DraftValidationError

logger = get_logger(__name__)


def _validate_item(index: int, item: LineItem) -> list[FieldError]:
    prefix = f"items.{index}"
    errors: list[FieldError] = []

    if not (item.product_id or "").strip():
        errors.append(FieldError(field=f"{prefix}.product_id", message="Product is required"))
    if not item.product_name.strip():
        errors.append(
            FieldError(field=f"{prefix}.product_name", message="Product name is required")
        )

    quantity = parse_amount(item.quantity)
    if quantity is None:
        errors.append(FieldError(field=f"{prefix}.quantity", message="Quantity is required"))
    elif quantity < 1:
        errors.append(
            FieldError(field=f"{prefix}.quantity", message="Quantity must be at least 1")
        )
    elif quantity != quantity.to_integral_value():
        errors.append(
            FieldError(field=f"{prefix}.quantity", message="Quantity must be a whole number")
        )

    if not item.price.strip():
        errors.append(FieldError(field=f"{prefix}.price", message="Price is required"))
    else:
        price = parse_amount(item.price)
        if price is None:
            errors.append(FieldError(field=f"{prefix}.price", message="Price must be a number"))
        elif price < 0:
            errors.append(FieldError(field=f"{prefix}.price", message="Price cannot be negative"))

    return errors


class SubmissionAssembler:
    """Builds the persistence payload from a draft."""

    def validate(self, draft: InvoiceDraft) -> list[FieldError]:
        """Every required-field and minimum-value violation, in form order."""
        errors: list[FieldError] = []

        if not draft.customer_name.strip():
            errors.append(FieldError(field="customer_name", message="Customer name is required"))

        if not draft.items:
            errors.append(FieldError(field="items", message="At least one item is required"))

        for index, item in enumerate(draft.items):
            errors.extend(_validate_item(index, item))

        return errors

    def assemble(self, draft: InvoiceDraft) -> TransactionSubmission:
        """
        Validate and serialize ``draft``.

        Raises:
            DraftValidationError: the draft has at least one field error.
                Nothing should be sent to the persistence boundary.
        """
        errors = self.validate(draft)
        if errors:
            logger.info(
                "submission_validation_failed",
                errors=[e.field for e in errors],
            )
            raise DraftValidationError(errors)

        items: list[TransactionItemRecord] = []
        items_total = ZERO
        for item in draft.items:
            price = parse_amount(item.price) or ZERO
            quantity = int(item.quantity)  # type: ignore[arg-type]
            line_total = price * quantity
            items_total += line_total
            items.append(
                TransactionItemRecord(
                    product_id=item.product_id.strip(),  # type: ignore[union-attr]
                    product_name=item.product_name,
                    quantity=quantity,
                    price=item.price.strip(),
                    total=to_decimal_string(line_total),
                )
            )

        # Unlike the live aggregator total, the persisted total is not floored
        discount = parse_decimal(draft.discount)
        grand_total = items_total - discount

        transaction = TransactionRecord(
            customer_id=draft.customer_id or None,
            customer_name=draft.customer_name.strip(),
            total=to_decimal_string(grand_total),
            discount=to_decimal_string(discount),
            tax="0",
            payment_type=draft.payment_type,
            currency=draft.currency,
            status="completed",
            transaction_type="sale",
        )
        return TransactionSubmission(transaction=transaction, items=items)
