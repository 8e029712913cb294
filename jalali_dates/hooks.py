app_name = "jalali_dates"
app_title = "Jalali Dates"
app_publisher = "Workhub"
app_description = "Jalali/Gregorian date conversion, Persian digit handling and Iranian field validators for staff management."
app_email = "support@example.com"
app_license = "MIT"

# Boot
boot_session = "jalali_dates.boot.boot_session"

# Jinja
jinja = {
    "filters": [
        "jalali_dates.api.dates.to_jalali",
        "jalali_dates.api.dates.to_jalali_display",
        "jalali_dates.api.dates.to_gregorian",
    ],
}

# Fixtures / Data
fixtures = []
