"""fixtures.py — Sample banking data behind every mock response.

Field names and nesting match the banking backend's JSON exactly (camelCase,
nested ``customer`` summaries on accounts and tickets), so the dashboard
renders mock and live data with the same code.

Design principles:
    - Fixed ids and timestamps so data is identical on every start
    - Three customers at different KYC stages (VERIFIED, PENDING, REJECTED)
    - Enough transactions on the demo account to exercise paging and
      the five-row mini statement
    - Module-level data is never mutated; MockBankingBackend works on a copy

Called by: adapters/mock_backend.py, factory.py
Depends on: Nothing
"""

from __future__ import annotations

from typing import Any

# ─── Accepted Credentials ─────────────────────────────────────────────────────
# Anything else is rejected with a 401 domain error.

MOCK_CUSTOMER_CREDENTIALS: dict[str, tuple[str, int]] = {
    "demo@wtfbank.com": ("demo123", 1001),
    "priya.sharma@wtfbank.com": ("priya123", 1002),
}

MOCK_ADMIN_CREDENTIALS: dict[str, tuple[str, int]] = {
    "admin001": ("admin123", 9001),
}

# ─── Admins ───────────────────────────────────────────────────────────────────

MOCK_ADMINS: list[dict[str, Any]] = [
    {
        "adminId": 9001,
        "username": "admin001",
        "fullName": "Meera Iyer",
        "email": "meera.iyer@wtfbank.com",
        "role": "ROLE_SUPER_ADMIN",
    },
]

# ─── Customers ────────────────────────────────────────────────────────────────

MOCK_CUSTOMERS: list[dict[str, Any]] = [
    {
        "customerId": 1001,
        "firstName": "John",
        "lastName": "Doe",
        "email": "demo@wtfbank.com",
        "phoneNumber": "+91 98765 43210",
        "dateOfBirth": "1990-05-14",
        "gender": "MALE",
        "aadharNumber": "XXXX-XXXX-4821",
        "panNumber": "ABCPD1234F",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zipCode": "560001",
        "country": "India",
        "profilePhotoUrl": None,
        "emailVerified": True,
        "phoneVerified": True,
        "kycStatus": "VERIFIED",
        "hasAadharDocument": True,
        "hasPanDocument": True,
        "documentsUploadTimestamp": "2024-01-01T09:30:00Z",
        "createdAt": "2023-12-28T11:00:00Z",
    },
    {
        "customerId": 1002,
        "firstName": "Priya",
        "lastName": "Sharma",
        "email": "priya.sharma@wtfbank.com",
        "phoneNumber": "+91 91234 56780",
        "dateOfBirth": "1994-11-02",
        "gender": "FEMALE",
        "aadharNumber": "XXXX-XXXX-7310",
        "panNumber": "BQRPS5678K",
        "city": "Pune",
        "state": "Maharashtra",
        "zipCode": "411001",
        "country": "India",
        "profilePhotoUrl": None,
        "emailVerified": True,
        "phoneVerified": False,
        "kycStatus": "PENDING",
        "hasAadharDocument": True,
        "hasPanDocument": True,
        "documentsUploadTimestamp": "2024-08-18T14:05:00Z",
        "createdAt": "2024-08-17T10:20:00Z",
    },
    {
        "customerId": 1003,
        "firstName": "Arjun",
        "lastName": "Mehta",
        "email": "arjun.mehta@wtfbank.com",
        "phoneNumber": "+91 99887 66554",
        "dateOfBirth": "1987-03-23",
        "gender": "MALE",
        "aadharNumber": "XXXX-XXXX-1188",
        "panNumber": "CDMPM9012L",
        "city": "Chennai",
        "state": "Tamil Nadu",
        "zipCode": "600001",
        "country": "India",
        "profilePhotoUrl": None,
        "emailVerified": True,
        "phoneVerified": True,
        "kycStatus": "REJECTED",
        "hasAadharDocument": True,
        "hasPanDocument": False,
        "documentsUploadTimestamp": "2024-07-02T08:45:00Z",
        "createdAt": "2024-06-30T16:10:00Z",
    },
]


def _customer_summary(customer_id: int) -> dict[str, Any]:
    """Nested customer object as embedded in accounts and tickets."""
    customer = next(c for c in MOCK_CUSTOMERS if c["customerId"] == customer_id)
    return {
        "customerId": customer["customerId"],
        "firstName": customer["firstName"],
        "lastName": customer["lastName"],
        "email": customer["email"],
    }


def _message(
    message_id: int,
    ticket_id: int,
    sender_type: str,
    sender_name: str,
    content: str,
    created_at: str,
) -> dict[str, Any]:
    return {
        "messageId": message_id,
        "ticketId": ticket_id,
        "senderType": sender_type,
        "senderName": sender_name,
        "content": content,
        "createdAt": created_at,
    }


# ─── Accounts ─────────────────────────────────────────────────────────────────

MOCK_ACCOUNTS: list[dict[str, Any]] = [
    {
        "accountId": 2001,
        "accountNumber": "50100012345678",
        "accountType": "SAVINGS",
        "holderType": "INDIVIDUAL",
        "balance": 125430.50,
        "accountStatus": "ACTIVE",
        "createdDate": "2023-12-28T11:05:00Z",
        "ifscCode": "WTFB0000123",
        "customer": _customer_summary(1001),
    },
    {
        "accountId": 2002,
        "accountNumber": "50200087654321",
        "accountType": "CURRENT",
        "holderType": "INDIVIDUAL",
        "balance": 48210.00,
        "accountStatus": "ACTIVE",
        "createdDate": "2024-02-10T09:00:00Z",
        "ifscCode": "WTFB0000123",
        "customer": _customer_summary(1001),
    },
    {
        "accountId": 2003,
        "accountNumber": "50100055501234",
        "accountType": "SAVINGS",
        "holderType": "INDIVIDUAL",
        "balance": 15000.00,
        "accountStatus": "ACTIVE",
        "createdDate": "2024-08-17T10:25:00Z",
        "ifscCode": "WTFB0000456",
        "customer": _customer_summary(1002),
    },
    {
        "accountId": 2004,
        "accountNumber": "50100066609876",
        "accountType": "SAVINGS",
        "holderType": "INDIVIDUAL",
        "balance": 3200.75,
        "accountStatus": "FROZEN",
        "createdDate": "2024-06-30T16:15:00Z",
        "ifscCode": "WTFB0000789",
        "customer": _customer_summary(1003),
    },
]

# ─── Transactions ─────────────────────────────────────────────────────────────
# A transaction touches an account when it is the source or the destination.
# Listed oldest first; the mock adapter sorts newest first on read.

MOCK_TRANSACTIONS: list[dict[str, Any]] = [
    {
        "transactionId": 3001,
        "accountId": 2001,
        "sourceAccountId": None,
        "destinationAccountId": 2001,
        "transactionType": "CREDIT",
        "amount": 85000.00,
        "description": "Salary - August",
        "mode": "NEFT",
        "status": "COMPLETED",
        "timestamp": "2024-08-01T10:00:00Z",
        "balanceAfter": 112430.50,
    },
    {
        "transactionId": 3002,
        "accountId": 2001,
        "sourceAccountId": 2001,
        "destinationAccountId": None,
        "transactionType": "DEBIT",
        "amount": 1450.00,
        "description": "Electricity bill",
        "mode": "UPI",
        "status": "COMPLETED",
        "timestamp": "2024-08-03T18:22:00Z",
        "balanceAfter": 110980.50,
    },
    {
        "transactionId": 3003,
        "accountId": 2001,
        "sourceAccountId": 2001,
        "destinationAccountId": 2002,
        "transactionType": "TRANSFER",
        "amount": 10000.00,
        "description": "Move to current account",
        "mode": "IMPS",
        "status": "COMPLETED",
        "timestamp": "2024-08-05T09:15:00Z",
        "balanceAfter": 100980.50,
    },
    {
        "transactionId": 3004,
        "accountId": 2001,
        "sourceAccountId": 2001,
        "destinationAccountId": None,
        "transactionType": "DEBIT",
        "amount": 2000.00,
        "description": "ATM withdrawal",
        "mode": "ATM",
        "status": "COMPLETED",
        "timestamp": "2024-08-09T20:40:00Z",
        "balanceAfter": 98980.50,
    },
    {
        "transactionId": 3005,
        "accountId": 2001,
        "sourceAccountId": None,
        "destinationAccountId": 2001,
        "transactionType": "CREDIT",
        "amount": 450.00,
        "description": "Interest credit",
        "mode": "SYSTEM",
        "status": "COMPLETED",
        "timestamp": "2024-08-15T00:05:00Z",
        "balanceAfter": 99430.50,
    },
    {
        "transactionId": 3006,
        "accountId": 2001,
        "sourceAccountId": None,
        "destinationAccountId": 2001,
        "transactionType": "CREDIT",
        "amount": 30000.00,
        "description": "Freelance payment",
        "mode": "NEFT",
        "status": "COMPLETED",
        "timestamp": "2024-08-20T12:30:00Z",
        "balanceAfter": 129430.50,
    },
    {
        "transactionId": 3007,
        "accountId": 2001,
        "sourceAccountId": 2001,
        "destinationAccountId": None,
        "transactionType": "DEBIT",
        "amount": 4000.00,
        "description": "Grocery shopping",
        "mode": "UPI",
        "status": "COMPLETED",
        "timestamp": "2024-08-22T17:10:00Z",
        "balanceAfter": 125430.50,
    },
    {
        "transactionId": 3008,
        "accountId": 2002,
        "sourceAccountId": 2002,
        "destinationAccountId": None,
        "transactionType": "DEBIT",
        "amount": 1790.00,
        "description": "Vendor payment",
        "mode": "NEFT",
        "status": "COMPLETED",
        "timestamp": "2024-08-12T11:45:00Z",
        "balanceAfter": 48210.00,
    },
    {
        "transactionId": 3009,
        "accountId": 2003,
        "sourceAccountId": None,
        "destinationAccountId": 2003,
        "transactionType": "CREDIT",
        "amount": 15000.00,
        "description": "Initial deposit",
        "mode": "CASH",
        "status": "COMPLETED",
        "timestamp": "2024-08-17T10:30:00Z",
        "balanceAfter": 15000.00,
    },
    {
        "transactionId": 3010,
        "accountId": 2004,
        "sourceAccountId": None,
        "destinationAccountId": 2004,
        "transactionType": "CREDIT",
        "amount": 3200.75,
        "description": "Initial deposit",
        "mode": "CASH",
        "status": "COMPLETED",
        "timestamp": "2024-06-30T16:20:00Z",
        "balanceAfter": 3200.75,
    },
]

# ─── KYC Documents ────────────────────────────────────────────────────────────

KYC_DOCUMENT_TYPES = frozenset({"AADHAR", "PAN"})

MOCK_KYC_DOCUMENTS: list[dict[str, Any]] = [
    {
        "documentId": 4001,
        "customerId": 1001,
        "documentType": "AADHAR",
        "originalFilename": "aadhar_john_doe.pdf",
        "uploadTimestamp": "2024-01-01T09:30:00Z",
        "verificationStatus": "VERIFIED",
        "verificationNotes": "Details match the application.",
        "verifiedAt": "2024-01-02T10:00:00Z",
        "fileSize": 248_113,
    },
    {
        "documentId": 4002,
        "customerId": 1001,
        "documentType": "PAN",
        "originalFilename": "pan_john_doe.jpg",
        "uploadTimestamp": "2024-01-01T09:31:00Z",
        "verificationStatus": "VERIFIED",
        "verificationNotes": "Verified against NSDL.",
        "verifiedAt": "2024-01-02T10:05:00Z",
        "fileSize": 98_542,
    },
    {
        "documentId": 4003,
        "customerId": 1002,
        "documentType": "AADHAR",
        "originalFilename": "aadhar_priya.pdf",
        "uploadTimestamp": "2024-08-18T14:05:00Z",
        "verificationStatus": "PENDING",
        "verificationNotes": "",
        "verifiedAt": None,
        "fileSize": 301_776,
    },
    {
        "documentId": 4004,
        "customerId": 1002,
        "documentType": "PAN",
        "originalFilename": "pan_priya.png",
        "uploadTimestamp": "2024-08-18T14:06:00Z",
        "verificationStatus": "PENDING",
        "verificationNotes": "",
        "verifiedAt": None,
        "fileSize": 120_004,
    },
    {
        "documentId": 4005,
        "customerId": 1003,
        "documentType": "AADHAR",
        "originalFilename": "aadhar_scan_blurry.jpg",
        "uploadTimestamp": "2024-07-02T08:45:00Z",
        "verificationStatus": "REJECTED",
        "verificationNotes": "Image unreadable, please upload a clearer scan.",
        "verifiedAt": "2024-07-03T12:00:00Z",
        "fileSize": 45_210,
    },
]

# ─── Support Tickets ──────────────────────────────────────────────────────────

MOCK_SUPPORT_TICKETS: list[dict[str, Any]] = [
    {
        "ticketId": 5001,
        "customer": _customer_summary(1001),
        "subject": "Account Balance Inquiry",
        "description": "Interest credit for July looks lower than expected.",
        "category": "ACCOUNT",
        "priority": "MEDIUM",
        "status": "RESOLVED",
        "channel": "WEB",
        "createdAt": "2024-08-20T10:00:00Z",
        "updatedAt": "2024-08-21T15:30:00Z",
        "assignedAdmin": "admin001",
        "resolutionNotes": "Interest is credited quarterly; July amount was prorated.",
        "escalated": False,
        "escalatedTo": None,
        "closedAt": None,
        "messages": [
            _message(6001, 5001, "CUSTOMER", "John Doe", "Interest for July is lower than June. Why?", "2024-08-20T10:00:00Z"),
            _message(6002, 5001, "ADMIN", "Meera Iyer", "Interest is credited quarterly; July was prorated.", "2024-08-21T15:30:00Z"),
        ],
    },
    {
        "ticketId": 5002,
        "customer": _customer_summary(1001),
        "subject": "UPI transfer pending",
        "description": "A UPI payment shows debited but the merchant has not received it.",
        "category": "TRANSACTION",
        "priority": "HIGH",
        "status": "IN_PROGRESS",
        "channel": "WEB",
        "createdAt": "2024-08-22T18:00:00Z",
        "updatedAt": "2024-08-23T09:10:00Z",
        "assignedAdmin": "admin001",
        "resolutionNotes": None,
        "escalated": True,
        "escalatedTo": "Payments Operations",
        "closedAt": None,
        "messages": [
            _message(6003, 5002, "ADMIN", "Meera Iyer", "Escalated to payments operations for a UPI trace.", "2024-08-23T09:10:00Z"),
        ],
    },
    {
        "ticketId": 5003,
        "customer": _customer_summary(1002),
        "subject": "KYC verification status",
        "description": "Documents uploaded three days ago, still pending.",
        "category": "KYC",
        "priority": "MEDIUM",
        "status": "OPEN",
        "channel": "WEB",
        "createdAt": "2024-08-21T08:15:00Z",
        "updatedAt": None,
        "assignedAdmin": None,
        "resolutionNotes": None,
        "escalated": False,
        "escalatedTo": None,
        "closedAt": None,
        "messages": [],
    },
    {
        "ticketId": 5004,
        "customer": _customer_summary(1003),
        "subject": "Account frozen",
        "description": "Cannot make payments from my savings account.",
        "category": "ACCOUNT",
        "priority": "URGENT",
        "status": "CLOSED",
        "channel": "PHONE",
        "createdAt": "2024-07-04T13:00:00Z",
        "updatedAt": "2024-07-05T10:00:00Z",
        "assignedAdmin": "admin001",
        "resolutionNotes": "Account frozen pending KYC re-submission.",
        "escalated": False,
        "escalatedTo": None,
        "closedAt": "2024-07-05T10:00:00Z",
        "messages": [
            _message(6004, 5004, "ADMIN", "Meera Iyer", "Please re-submit a clear Aadhaar scan to unfreeze the account.", "2024-07-05T10:00:00Z"),
        ],
    },
]
