INVALID_ORDER_MESSAGE = "Invalid order data. Please try again."
PAYMENT_VERIFICATION_FAILED_MESSAGE = "Payment verification failed."
AMOUNT_MISMATCH_MESSAGE = "Payment amount mismatch. Contact support."
PERSISTENCE_FAILED_MESSAGE = (
    "Your payment was successful, but we failed to save your order. "
    "Please contact support immediately."
)
ORDER_PLACED_MESSAGE = "Your order has been placed successfully!"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"

INITIAL_ORDER_STATUS = "received"

RESERVATION_CHANNEL = "reservation-status-changes"

RESERVATION_STATUS_MESSAGES = {
    "confirmed": "Your reservation has been confirmed. We look forward to serving you!",
    "completed": "Your reservation has been completed. Thank you for choosing us!",
    "cancelled": "Your reservation has been cancelled. If this was not you, please contact us.",
}
