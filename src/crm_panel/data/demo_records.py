"""Demo representatives and invoices in the backend's camelCase shape."""

DEMO_REPRESENTATIVES = [
    {
        "id": 1,
        "code": "REP-001",
        "name": "فروشگاه آریا",
        "ownerName": "علی رضایی",
        "panelUsername": "aria_shop",
        "phone": "09121234567",
        "publicId": "pub-aria",
        "salesPartnerId": "1",
        "isActive": True,
        "totalDebt": "12500000",
        "totalSales": "98000000",
        "credit": "5000000",
        "createdAt": "2024-03-02T09:30:00Z",
        "updatedAt": "2024-08-11T14:05:00Z",
    },
    {
        "id": 2,
        "code": "REP-002",
        "name": "بازرگانی پارس",
        "ownerName": "مریم احمدی",
        "panelUsername": "pars_trade",
        "phone": "09123334455",
        "publicId": "pub-pars",
        "salesPartnerId": "1",
        "isActive": True,
        "totalDebt": "0",
        "totalSales": "154000000",
        "credit": "20000000",
        "createdAt": "2024-01-15T08:00:00Z",
        "updatedAt": "2024-09-01T10:00:00Z",
    },
    {
        "id": 3,
        "code": "REP-003",
        "name": "نت‌سرویس البرز",
        "ownerName": "حسین کریمی",
        "panelUsername": "alborz_net",
        "phone": "09351112233",
        "publicId": "pub-alborz",
        "salesPartnerId": "2",
        "isActive": False,
        "totalDebt": "43000000",
        "totalSales": "51000000",
        "credit": "0",
        "createdAt": "2023-11-20T12:00:00Z",
        "updatedAt": "2024-06-30T16:45:00Z",
    },
    {
        "id": 4,
        "code": "REP-004",
        "name": "کافه‌نت دماوند",
        "ownerName": "زهرا موسوی",
        "panelUsername": "damavand_cafe",
        "phone": "09198887766",
        "publicId": "pub-damavand",
        "salesPartnerId": "2",
        "isActive": True,
        "totalDebt": "3200000",
        "totalSales": "27500000",
        "credit": "1000000",
        "createdAt": "2024-05-05T07:15:00Z",
        "updatedAt": "2024-09-12T09:20:00Z",
    },
    {
        "id": 5,
        "code": "REP-005",
        "name": "ارتباطات زاگرس",
        "ownerName": "رضا نوری",
        "panelUsername": "zagros_com",
        "phone": "09134445566",
        "publicId": "pub-zagros",
        "salesPartnerId": "3",
        "isActive": True,
        "totalDebt": "8800000",
        "totalSales": "76300000",
        "credit": "0",
        "createdAt": "2024-02-28T11:40:00Z",
        "updatedAt": "2024-07-19T13:10:00Z",
    },
    {
        "id": 6,
        "code": "REP-006",
        "name": "شبکه خلیج فارس",
        "ownerName": "سارا جعفری",
        "panelUsername": "persian_gulf",
        "phone": "09172223344",
        "publicId": "pub-gulf",
        "salesPartnerId": "3",
        "isActive": False,
        "totalDebt": "0",
        "totalSales": "9400000",
        "credit": "0",
        "createdAt": "2023-09-09T09:09:00Z",
        "updatedAt": "2024-01-02T08:30:00Z",
    },
    {
        "id": 7,
        "code": "REP-007",
        "name": "دیجیتال سپاهان",
        "ownerName": "امیر حسینی",
        "panelUsername": "sepahan_digital",
        "phone": "09131239876",
        "publicId": "pub-sepahan",
        "salesPartnerId": "1",
        "isActive": True,
        "totalDebt": "21000000",
        "totalSales": "132000000",
        "credit": "15000000",
        "createdAt": "2024-06-18T15:00:00Z",
        "updatedAt": "2024-09-20T17:30:00Z",
    },
    {
        "id": 8,
        "code": "REP-008",
        "name": "تجارت کویر",
        "ownerName": "فاطمه صادقی",
        "panelUsername": "kavir_trade",
        "phone": "09151237654",
        "publicId": "pub-kavir",
        "salesPartnerId": "2",
        "isActive": True,
        "totalDebt": "640000",
        "totalSales": "18200000",
        "credit": "0",
        "createdAt": "2024-07-01T10:10:00Z",
        "updatedAt": "2024-09-02T12:00:00Z",
    },
    {
        "id": 9,
        "code": "REP-009",
        "name": "سامانه شمال",
        "ownerName": "محمد یوسفی",
        "panelUsername": "shomal_sys",
        "phone": "09111230000",
        "publicId": "pub-shomal",
        "salesPartnerId": "3",
        "isActive": True,
        "totalDebt": "15500000",
        "totalSales": "60100000",
        "credit": "2500000",
        "createdAt": "2023-12-12T12:12:00Z",
        "updatedAt": "2024-08-25T08:45:00Z",
    },
    {
        "id": 10,
        "code": "REP-010",
        "name": "مخابرات آذر",
        "ownerName": "نرگس قاسمی",
        "panelUsername": "azar_tel",
        "phone": "09141231111",
        "publicId": "pub-azar",
        "salesPartnerId": "1",
        "isActive": False,
        "totalDebt": "27000000",
        "totalSales": "33000000",
        "credit": "0",
        "createdAt": "2024-04-04T04:04:00Z",
        "updatedAt": "2024-05-05T05:05:00Z",
    },
    {
        "id": 11,
        "code": "REP-011",
        "name": "پیام‌رسان خزر",
        "ownerName": "بهرام اکبری",
        "panelUsername": "khazar_msg",
        "phone": "09117776655",
        "publicId": "pub-khazar",
        "salesPartnerId": "2",
        "isActive": True,
        "totalDebt": "1900000",
        "totalSales": "44800000",
        "credit": "3000000",
        "createdAt": "2024-08-08T08:08:00Z",
        "updatedAt": "2024-09-18T11:11:00Z",
    },
]

DEMO_INVOICES = [
    {
        "id": 101,
        "invoiceNumber": "INV-1403-0001",
        "representativeId": 1,
        "amount": "12500000",
        "issueDate": "2024-08-01",
        "dueDate": "2024-08-31",
        "status": "unpaid",
        "sentToTelegram": True,
        "telegramSentAt": "2024-08-01T10:00:00Z",
        "createdAt": "2024-08-01T09:00:00Z",
        "representativeName": "فروشگاه آریا",
        "representativeCode": "REP-001",
    },
    {
        "id": 102,
        "invoiceNumber": "INV-1403-0002",
        "representativeId": 2,
        "amount": "23000000",
        "issueDate": "2024-08-03",
        "dueDate": "2024-09-02",
        "status": "paid",
        "sentToTelegram": True,
        "telegramSentAt": "2024-08-03T12:30:00Z",
        "createdAt": "2024-08-03T12:00:00Z",
        "representativeName": "بازرگانی پارس",
        "representativeCode": "REP-002",
    },
    {
        "id": 103,
        "invoiceNumber": "INV-1403-0003",
        "representativeId": 3,
        "amount": "43000000",
        "issueDate": "2024-06-10",
        "dueDate": "2024-07-10",
        "status": "overdue",
        "sentToTelegram": False,
        "telegramSentAt": None,
        "createdAt": "2024-06-10T08:00:00Z",
        "representativeName": "نت‌سرویس البرز",
        "representativeCode": "REP-003",
    },
    {
        "id": 104,
        "invoiceNumber": "INV-1403-0004",
        "representativeId": 4,
        "amount": "3200000",
        "issueDate": "2024-09-01",
        "dueDate": "2024-10-01",
        "status": "partial",
        "sentToTelegram": False,
        "telegramSentAt": None,
        "createdAt": "2024-09-01T07:45:00Z",
        "representativeName": "کافه‌نت دماوند",
        "representativeCode": "REP-004",
    },
    {
        "id": 105,
        "invoiceNumber": "INV-1403-0005",
        "representativeId": 7,
        "amount": "21000000",
        "issueDate": "2024-09-05",
        "dueDate": "2024-10-05",
        "status": "unpaid",
        "sentToTelegram": True,
        "telegramSentAt": "2024-09-05T09:15:00Z",
        "createdAt": "2024-09-05T09:00:00Z",
        "representativeName": "دیجیتال سپاهان",
        "representativeCode": "REP-007",
    },
    {
        "id": 106,
        "invoiceNumber": "INV-1403-0006",
        "representativeId": 9,
        "amount": "15500000",
        "issueDate": "2024-09-10",
        "dueDate": "2024-10-10",
        "status": "unpaid",
        "sentToTelegram": False,
        "telegramSentAt": None,
        "createdAt": "2024-09-10T14:20:00Z",
        "representativeName": "سامانه شمال",
        "representativeCode": "REP-009",
    },
]
