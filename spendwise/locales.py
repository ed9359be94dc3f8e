"""UI strings per language. Category names are looked up by their lowercased name."""

EN = {
    "appName": "Spend Wise",
    "login": "Log in",
    "signup": "Sign up",
    "logout": "Log out",
    "email": "Email",
    "password": "Password",
    "totalSpent": "Total Spent",
    "totalBudget": "Total Budget",
    "remainingBudget": "Remaining Budget",
    "inTheCurrentMonth": "In the current month",
    "forThisMonth": "For this month",
    "remainingForThisMonth": "Remaining for this month",
    "youAreOverBudget": "You are over budget!",
    "spendingByCategory": "Spending by Category",
    "recentExpenses": "Recent Expenses",
    "last5Transactions": "Your last 5 transactions.",
    "addExpense": "Add Expense",
    "addNewExpense": "Add New Expense",
    "enterTransactionDetails": "Enter the details of your transaction.",
    "description": "Description",
    "egCoffeeWithFriend": "e.g. Coffee with a friend",
    "amount": "Amount",
    "category": "Category",
    "selectACategory": "Select a category",
    "date": "Date",
    "cancel": "Cancel",
    "budgetGoals": "Budget Goals",
    "editBudgets": "Edit Budgets",
    "saveChanges": "Save Changes",
    "getAISuggestions": "Get AI Suggestions",
    "generating": "Generating",
    "suggestion": "Suggestion",
    "aiBudgetPlanner": "AI Budget Planner",
    "enterTotalBudgetSuggestion": "Enter your total monthly budget and get a suggested allocation.",
    "generatePlan": "Generate Plan",
    "settings": "Settings",
    "customizeYourExperience": "Customize your experience.",
    "darkMode": "Dark Mode",
    "language": "Language",
    "currency": "Currency",
    "success": "Success",
    "error": "Error",
    "noExpenses": "No expenses yet.",
    "food": "Food",
    "transportation": "Transportation",
    "housing": "Housing",
    "shopping": "Shopping",
    "health": "Health",
    "entertainment": "Entertainment",
}

HI = {
    "appName": "स्पेंड वाइज़",
    "login": "लॉग इन",
    "signup": "साइन अप",
    "logout": "लॉग आउट",
    "email": "ईमेल",
    "password": "पासवर्ड",
    "totalSpent": "कुल खर्च",
    "totalBudget": "कुल बजट",
    "remainingBudget": "शेष बजट",
    "inTheCurrentMonth": "इस महीने में",
    "forThisMonth": "इस महीने के लिए",
    "remainingForThisMonth": "इस महीने के लिए शेष",
    "youAreOverBudget": "आप बजट से अधिक हैं!",
    "spendingByCategory": "श्रेणी के अनुसार खर्च",
    "recentExpenses": "हाल के खर्च",
    "last5Transactions": "आपके पिछले 5 लेनदेन।",
    "addExpense": "खर्च जोड़ें",
    "addNewExpense": "नया खर्च जोड़ें",
    "enterTransactionDetails": "अपने लेनदेन का विवरण दर्ज करें।",
    "description": "विवरण",
    "egCoffeeWithFriend": "जैसे दोस्त के साथ कॉफ़ी",
    "amount": "राशि",
    "category": "श्रेणी",
    "selectACategory": "एक श्रेणी चुनें",
    "date": "तारीख",
    "cancel": "रद्द करें",
    "budgetGoals": "बजट लक्ष्य",
    "editBudgets": "बजट संपादित करें",
    "saveChanges": "परिवर्तन सहेजें",
    "getAISuggestions": "एआई सुझाव प्राप्त करें",
    "generating": "बना रहे हैं",
    "suggestion": "सुझाव",
    "aiBudgetPlanner": "एआई बजट योजनाकार",
    "enterTotalBudgetSuggestion": "अपना कुल मासिक बजट दर्ज करें और सुझाया गया आवंटन पाएं।",
    "generatePlan": "योजना बनाएं",
    "settings": "सेटिंग्स",
    "customizeYourExperience": "अपना अनुभव अनुकूलित करें।",
    "darkMode": "डार्क मोड",
    "language": "भाषा",
    "currency": "मुद्रा",
    "success": "सफल",
    "error": "त्रुटि",
    "noExpenses": "अभी कोई खर्च नहीं।",
    "food": "भोजन",
    "transportation": "परिवहन",
    "housing": "आवास",
    "shopping": "खरीदारी",
    "health": "स्वास्थ्य",
    "entertainment": "मनोरंजन",
}

TRANSLATIONS = {"en": EN, "hi": HI}
