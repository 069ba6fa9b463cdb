# /agent/prompts/plan_update_prompt.py

from typing import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

SECTION_HEADERS = (
    "## 🎯 Key Features",
    "## 🎨 Design Approach",
    "## 📦 Main Entities",
    "## 🔄 Key Business Workflows",
    "## 🛤️ User Journeys",
    "## 🏗️ App Structure",
)

EXISTING_PLAN_HEADER = "EXISTING PLAN:"

# Sent as the only human turn; the conversation itself lives in the system prompt.
PLAN_UPDATE_TRIGGER = "Update the app plan now."

PLAN_STRUCTURE = f"""\
{SECTION_HEADERS[0]}

- [List the main user-facing features and core functionality as bullet points.]

{SECTION_HEADERS[1]}

- [Describe the UI/UX strategy and theming approach]

{SECTION_HEADERS[2]}

- [Define the core entities, their relationships, and how data flows between them. Include entity attributes and business logic interactions.]

{SECTION_HEADERS[3]}

- [Detail the critical business workflows, such as status transitions, balance updates in ledgers, and other domain-specific processes. Include triggers, actions, and outcomes for each workflow.]

{SECTION_HEADERS[4]}

- [Describe the primary user journeys, detailing the steps a user takes to achieve key tasks within the app. Include entry points, decision paths, and end goals for each journey.]

{SECTION_HEADERS[5]}

- [Outline the main pages and screens of the app, user flow, and navigation structure. Include main UI components and CTAs (Call-To-Actions) for each page.]"""

FRESH_TASK = (
    "Create a rich, comprehensive initial app plan based on the user's input and conversation context. "
    "Make it detailed and inspiring to show the user what's possible."
)

MERGE_TASK = (
    "Always update the existing app plan to reflect the current conversation state, even if the changes "
    "seem minor. Every conversation turn should result in an updated plan."
)

FRESH_INSTRUCTIONS = """\
- CREATE a rich, comprehensive initial plan based on the user's input
- Use '-' for bullet points and ensure blank lines between items and sections
- Include detailed, inspiring content for each section with proper markdown formatting
- Use **bold** for important terms, feature names, and section headers
- Use *italic* for descriptions, explanations, and emphasis
- Make the plan feel complete and professional with rich formatting
- Show the user what's possible with their app idea
- Use the conversation context to inform the plan
- Be specific and actionable in your recommendations"""

MERGE_INSTRUCTIONS = """\
- ALWAYS update the plan - even if the changes are subtle
- Preserve ALL existing information from the current plan
- Add new information from the conversation with proper markdown formatting
- Use '-' for bullet points and ensure blank lines between items and sections
- Use **bold** for important terms, feature names, and section headers
- Use *italic* for descriptions, explanations, and emphasis
- Update any sections that have new details
- Do NOT remove information unless it's clearly contradicted by new input
- Build upon the existing plan, don't replace it
- If no new information is provided, still refine and improve the existing plan
- Never say "no update needed" - always provide an updated plan"""

PLAN_UPDATE_PROMPT_TEMPLATE = """\
You are an expert app planner. Your task is to {goal} with information from the conversation.

CRITICAL: You must output ONLY the app plan structure below. Do not ask questions, do not continue the conversation, do not respond conversationally.

TASK: {task}

PLAN STRUCTURE - OUTPUT THIS EXACT FORMAT:

{structure}

{existing_plan}INFORMATION FROM CONVERSATION:
{conversation_digest}

CURRENT CONTEXT: {message}

INSTRUCTIONS:
{instructions}

NOW GENERATE THE {label} STRUCTURED PLAN (no conversation, just the plan):"""

# Returned when the plan update call fails. Deliberately generic: it is a
# placeholder canvas, not a summary of the conversation.
FALLBACK_PLAN = """\
## 🎯 Key Features

**Core Functionality:**

• **User Authentication**: *Secure login and profile management system*
• **Responsive Design**: *Mobile-first approach with desktop optimization*
• **Core Features**: *Essential functionality based on app type and requirements*

**User Experience:**

• **Intuitive Navigation**: *Clear and logical user flow throughout the app*
• **Personalization**: *User-specific content and preferences*
• **Performance**: *Fast loading times and smooth interactions*

## 🎨 Design Approach

**Visual Design:**

• **Modern Interface**: *Clean, minimalist design with focus on usability*
• **Consistent Branding**: *Cohesive visual identity across all screens*
• **Accessibility**: *WCAG compliant design for inclusive user experience*

**User Experience Principles:**

• **Mobile-First**: *Design for mobile devices first, then enhance for desktop*
• **Progressive Enhancement**: *Core functionality works everywhere, enhanced features where supported*

## 📦 Main Entities

• **User**: *Account holder with profile, preferences and authentication details*
• **Content Item**: *The primary record the app manages, owned by a user*
• **Activity Log**: *Timestamped history of changes made to content items*

## 🔄 Key Business Workflows

• **Onboarding**: *Sign up, verify account, complete profile*
• **Content Lifecycle**: *Create, edit, archive and delete content items*
• **Notifications**: *Alert users when items they own change status*

## 🛤️ User Journeys

• **First Visit**: *Landing page, sign up, guided tour of the dashboard*
• **Daily Use**: *Log in, review dashboard, create or update content*
• **Account Management**: *Open settings, adjust preferences, manage profile*

## 🏗️ App Structure

**Page Architecture:**

• **Home/Dashboard**: *Main landing page with key functionality and navigation*
• **User Profile**: *Account management and personal settings*
• **Core Features**: *Primary app functionality pages*
• **Settings**: *Configuration and preferences management*

**Technical Architecture:**

• **Component-Based**: *Modular, reusable UI components*
• **State Management**: *Centralized data flow and state handling*
• **API Integration**: *Secure communication with backend services*
"""


def is_fresh_plan(current_plan: str) -> bool:
    """A plan that is empty or only whitespace means we start from scratch."""
    return not current_plan or not current_plan.strip()


def summarize_history(history: Sequence[BaseMessage]) -> str:
    """Digests prior turns into one block of user inputs and one of assistant replies."""
    user_messages = "\n".join(str(m.content) for m in history if isinstance(m, HumanMessage))
    assistant_messages = "\n".join(str(m.content) for m in history if isinstance(m, AIMessage))
    return f"User Inputs: {user_messages}\n\nAssistant Responses: {assistant_messages}"


def get_plan_update_prompt(message: str, history: Sequence[BaseMessage], current_plan: str) -> str:
    """Builds the system prompt for the plan update call, in fresh or merge mode."""
    fresh = is_fresh_plan(current_plan)
    existing_plan = "" if fresh else f"{EXISTING_PLAN_HEADER}\n{current_plan}\n\n"
    return PLAN_UPDATE_PROMPT_TEMPLATE.format(
        goal="CREATE A NEW COMPREHENSIVE APP PLAN" if fresh else "UPDATE THE EXISTING APP PLAN",
        task=FRESH_TASK if fresh else MERGE_TASK,
        structure=PLAN_STRUCTURE,
        existing_plan=existing_plan,
        conversation_digest=summarize_history(history),
        message=message,
        instructions=FRESH_INSTRUCTIONS if fresh else MERGE_INSTRUCTIONS,
        label="INITIAL" if fresh else "UPDATED",
    )
