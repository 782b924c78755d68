from html import escape


def contact_notification_template(message) -> str:
    """HTML email sent to the site owner for a new contact-form message"""
    subject = escape(message.subject or "No Subject")
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .body {{ white-space: pre-wrap; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h3>New Message from Portfolio</h3>
            <p><strong>Name:</strong> {escape(message.name)}</p>
            <p><strong>Email:</strong> {escape(message.email)}</p>
            <p><strong>Subject:</strong> {subject}</p>
            <hr/>
            <p><strong>Message:</strong></p>
            <p class="body">{escape(message.message)}</p>
        </div>
    </body>
    </html>
    """
