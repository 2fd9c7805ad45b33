from __future__ import annotations

# Canned report text. Conditions are (dimension, operator, threshold) tuples;
# reports.py evaluates them against the finished percentage map.

STRENGTH_INSIGHTS = {
    "cognitive_flexibility": {
        90: "Exceptional ability to adapt strategies and think creatively. This candidate will thrive in dynamic environments and excel at solving complex, novel problems.",
        80: "Strong adaptability and creative thinking skills. Comfortable with change and capable of generating innovative solutions.",
    },
    "emotional_regulation": {
        90: "Outstanding emotional control even under extreme pressure. This candidate will remain composed and make rational decisions in high-stress situations.",
        80: "Excellent stress management and emotional stability. Maintains professional composure and clear thinking during challenging interactions.",
    },
    "social_calibration": {
        90: "Masterful at reading social dynamics and adjusting approach accordingly. Will build strong client relationships and navigate complex interpersonal situations with ease.",
        80: "Highly perceptive of social cues and skilled at interpersonal interactions. Builds rapport quickly and manages relationships effectively.",
    },
    "achievement_drive": {
        90: "Exceptionally driven to exceed goals and outperform expectations. This candidate will consistently push for excellence and inspire others to achieve more.",
        80: "Strongly motivated by achievement and success. Sets ambitious goals and persistently works toward exceeding targets.",
    },
    "learning_orientation": {
        90: "Insatiable curiosity and commitment to continuous improvement. Will rapidly acquire new skills and stay ahead of industry trends.",
        80: "Strong desire to learn and grow professionally. Actively seeks feedback and quickly integrates new knowledge.",
    },
    "risk_tolerance": {
        90: "Exceptional comfort with uncertainty and calculated risk-taking. Will confidently make decisions with incomplete information and pioneer new approaches.",
        80: "Comfortable taking calculated risks when appropriate. Balances bold action with prudent analysis.",
    },
    "relationship_building": {
        90: "Natural relationship builder who creates deep, lasting professional connections. Will excel at client retention and team collaboration.",
        80: "Strong networking and relationship development skills. Builds trust quickly and maintains positive professional relationships.",
    },
    "ethical_reasoning": {
        90: "Unwavering commitment to integrity and ethical standards. Will serve as a moral compass for the team and protect the organization's reputation.",
        80: "Strong ethical foundation and commitment to doing the right thing. Makes principled decisions even when faced with pressure.",
    },
    "influence_style": {
        90: "Charismatic leader who naturally inspires and motivates others. Will excel in leadership roles and drive organizational change.",
        80: "Effective at influencing and persuading others. Comfortable taking leadership roles and guiding team efforts.",
    },
    "systems_thinking": {
        90: "Exceptional ability to see the big picture and understand complex interconnections. Will excel at strategic planning and process optimization.",
        80: "Strong analytical and strategic thinking capabilities. Effectively identifies patterns and solves complex problems.",
    },
    "self_management": {
        90: "Exceptional personal discipline and organizational skills. Will consistently deliver high-quality work on time and manage multiple priorities effortlessly.",
        80: "Highly organized and self-directed. Manages time effectively and maintains consistent productivity.",
    },
    "collaborative_intelligence": {
        90: "Outstanding team player who elevates group performance. Will foster collaboration and create synergy within any team.",
        80: "Strong collaborative skills and team orientation. Works effectively with others and contributes to group success.",
    },
}

GROWTH_DESCRIPTIONS = {
    "cognitive_flexibility": "May struggle with rapid changes or unconventional problems",
    "emotional_regulation": "Could experience difficulty managing stress in high-pressure situations",
    "social_calibration": "May miss important social cues or struggle with interpersonal nuances",
    "achievement_drive": "Might lack the competitive edge needed for sales-driven environments",
    "learning_orientation": "Could resist new approaches or be slow to acquire new skills",
    "risk_tolerance": "May be overly cautious or struggle with ambiguous situations",
    "relationship_building": "Could have difficulty establishing deep professional connections",
    "ethical_reasoning": "May occasionally struggle with complex ethical dilemmas",
    "influence_style": "Might find it challenging to persuade or lead others effectively",
    "systems_thinking": "Could miss important connections or struggle with strategic planning",
    "self_management": "May have difficulty with organization or time management",
    "collaborative_intelligence": "Could struggle in team settings or with collaborative projects",
}

DEVELOPMENT_ACTIONS = {
    "cognitive_flexibility": "Provide exposure to diverse problem-solving scenarios and encourage creative thinking exercises",
    "emotional_regulation": "Offer stress management training and mindfulness techniques",
    "social_calibration": "Provide interpersonal skills training and feedback on social interactions",
    "achievement_drive": "Set clear goals with incremental challenges and celebrate achievements",
    "learning_orientation": "Encourage participation in training programs and create a safe environment for experimentation",
    "risk_tolerance": "Start with small, controlled risks and gradually increase complexity",
    "relationship_building": "Provide networking opportunities and mentorship on relationship development",
    "ethical_reasoning": "Discuss ethical scenarios and provide clear guidelines on company values",
    "influence_style": "Offer presentation skills training and leadership development opportunities",
    "systems_thinking": "Provide training on strategic thinking and systems analysis",
    "self_management": "Implement time management tools and organizational systems",
    "collaborative_intelligence": "Facilitate team projects and provide feedback on collaboration skills",
}
DEFAULT_DEVELOPMENT_ACTION = "Provide targeted coaching and development opportunities"

SUMMARY_TEMPLATES = (
    (
        80,
        "This candidate demonstrates exceptional overall capabilities with an average dimensional score of {average:.1f}. "
        "They show particular strength in {top}, positioning them as a high-potential candidate who could make "
        "immediate and significant contributions to the organization.",
    ),
    (
        70,
        "This candidate shows strong overall potential with an average dimensional score of {average:.1f}. "
        "Key strengths include {top}. With targeted development, this individual could excel in client-facing roles.",
    ),
    (
        60,
        "This candidate displays solid foundational capabilities with an average dimensional score of {average:.1f}. "
        "Notable competencies include {top}. They would benefit from structured onboarding and mentorship to reach "
        "their full potential.",
    ),
    (
        None,
        "This candidate shows developing capabilities with an average dimensional score of {average:.1f}. "
        "Areas of relative strength include {top}. Significant development and support would be needed for success "
        "in demanding roles.",
    ),
)

CONSISTENCY_SENTENCE = (
    "Response behaviour shows a {speed} decision pace with {engagement} engagement across {count} answers."
)
INSUFFICIENT_CONSISTENCY_SENTENCE = "Too few timed answers were recorded to characterise response behaviour."

PREDICTION_RULES = (
    {
        "category": "Client Interactions",
        "positive": {
            "when": (("relationship_building", ">=", 70), ("social_calibration", ">=", 70)),
            "prediction": "Will excel at building and maintaining client relationships",
            "confidence": "High",
        },
        "negative": {
            "any": (("relationship_building", "<", 50), ("social_calibration", "<", 50)),
            "prediction": "May need support in client-facing situations",
            "confidence": "High",
        },
    },
    {
        "category": "Team Dynamics",
        "positive": {
            "when": (("collaborative_intelligence", ">=", 70), ("emotional_regulation", ">=", 70)),
            "prediction": "Will be a positive team contributor and help maintain group harmony",
            "confidence": "High",
        },
        "negative": {
            "any": (("collaborative_intelligence", "<", 50),),
            "prediction": "May prefer independent work over team collaboration",
            "confidence": "Medium",
        },
    },
    {
        "category": "Stress Management",
        "positive": {
            "when": (("emotional_regulation", ">=", 75), ("self_management", ">=", 70)),
            "prediction": "Will maintain high performance even under significant pressure",
            "confidence": "High",
        },
        "negative": {
            "any": (("emotional_regulation", "<", 50),),
            "prediction": "Performance may decline in high-pressure situations",
            "confidence": "Medium",
        },
    },
    {
        "category": "Leadership",
        "positive": {
            "when": (("influence_style", ">=", 75), ("achievement_drive", ">=", 75)),
            "prediction": "Strong potential for leadership roles and team management",
            "confidence": "High",
        },
    },
    {
        "category": "Innovation",
        "positive": {
            "when": (("cognitive_flexibility", ">=", 75), ("systems_thinking", ">=", 70)),
            "prediction": "Will bring creative solutions and strategic insights to challenges",
            "confidence": "High",
        },
    },
    {
        "category": "Sales Performance",
        "positive": {
            "when": (
                ("achievement_drive", ">=", 75),
                ("influence_style", ">=", 70),
                ("relationship_building", ">=", 70),
            ),
            "prediction": "High potential for exceeding sales targets and client acquisition",
            "confidence": "High",
        },
    },
)

RISK_RULES = (
    {
        "level": "HIGH",
        "factor": "Ethical Reasoning",
        "when": (("ethical_reasoning", "<", 40),),
        "description": "May struggle with ethical decision-making in complex situations",
        "mitigation": "Provide clear ethical guidelines and close supervision initially",
    },
    {
        "level": "HIGH",
        "factor": "Emotional Regulation",
        "when": (("emotional_regulation", "<", 40),),
        "description": "High risk of burnout or inappropriate responses under stress",
        "mitigation": "Implement stress management support and regular check-ins",
    },
    {
        "level": "HIGH",
        "factor": "Self Management",
        "when": (("self_management", "<", 40),),
        "description": "May struggle to meet deadlines or manage multiple priorities",
        "mitigation": "Provide structured oversight and project management tools",
    },
    {
        "level": "MEDIUM",
        "factor": "Client Relations",
        "when": (("relationship_building", "<", 50), ("social_calibration", "<", 50)),
        "description": "May struggle to build and maintain client relationships",
        "mitigation": "Pair with experienced advisors and provide relationship training",
    },
    {
        "level": "MEDIUM",
        "factor": "Performance Drive",
        "when": (("achievement_drive", "<", 50),),
        "description": "May lack the competitive drive needed for sales success",
        "mitigation": "Set incremental goals and provide regular motivation coaching",
    },
    {
        "level": "MEDIUM",
        "factor": "Adaptability",
        "when": (("learning_orientation", "<", 50),),
        "description": "May resist new processes or industry changes",
        "mitigation": "Provide structured training with clear benefits explained",
    },
    {
        "level": "MEDIUM",
        "factor": "Decision Making",
        "when": (("risk_tolerance", ">=", 85), ("ethical_reasoning", "<", 60)),
        "description": "May take excessive risks without considering ethical implications",
        "mitigation": "Establish clear risk parameters and decision escalation processes",
    },
    {
        "level": "MEDIUM",
        "factor": "Team Dynamics",
        "when": (("achievement_drive", ">=", 85), ("collaborative_intelligence", "<", 50)),
        "description": "Highly competitive nature may disrupt team cohesion",
        "mitigation": "Channel competitive drive toward external goals, not internal competition",
    },
)

PREFERRED_STYLES = (
    (
        (("social_calibration", ">=", 70), ("relationship_building", ">=", 70)),
        "Warm and personable, values relationship-building in communication",
    ),
    (
        (("systems_thinking", ">=", 70), ("achievement_drive", ">=", 70)),
        "Direct and results-oriented, prefers efficient, goal-focused communication",
    ),
    (
        (("cognitive_flexibility", ">=", 70), ("learning_orientation", ">=", 70)),
        "Exploratory and conceptual, enjoys discussing ideas and possibilities",
    ),
)
DEFAULT_PREFERRED_STYLE = "Balanced and adaptable communication style"

FOUR_FACTOR_TIPS = {
    "D": (
        "Be direct and to the point",
        "Focus on results and bottom line",
        "Avoid excessive details unless requested",
    ),
    "I": (
        "Allow time for social interaction",
        "Be enthusiastic and positive",
        "Recognize achievements publicly",
    ),
    "S": (
        "Be patient and supportive",
        "Provide clear expectations",
        "Avoid sudden changes without explanation",
    ),
    "C": (
        "Provide detailed information and data",
        "Be prepared with facts and logic",
        "Allow time for analysis and questions",
    ),
}

# Keyed by letter position in the temperament code.
TEMPERAMENT_TIPS = {
    0: {
        "E": "Prefers verbal communication and brainstorming",
        "I": "Prefers written communication and time to process",
    },
    2: {
        "T": "Responds well to logical arguments and objective criteria",
        "F": "Values empathy and consideration of personal impact",
    },
}

# Used when framework results are unavailable.
SCORE_BASED_TIPS = (
    ((("systems_thinking", ">=", 70),), "Provide detailed information and data"),
    ((("relationship_building", ">=", 70),), "Allow time for social interaction"),
    ((("achievement_drive", ">=", 70),), "Focus on results and bottom line"),
)

COMMUNICATION_CHALLENGES = (
    ((("emotional_regulation", "<", 50),), "May become defensive when receiving criticism"),
    ((("social_calibration", "<", 50),), "Might miss nonverbal cues or social nuances"),
    ((("influence_style", "<", 50),), "May struggle to assert opinions in group settings"),
)

BEST_APPROACHES = (
    ((("learning_orientation", ">=", 70),), "Frame feedback as learning opportunities and growth potential"),
    ((("achievement_drive", ">=", 70),), "Connect communication to goals and measurable outcomes"),
    ((("relationship_building", ">=", 70),), "Build rapport before addressing challenging topics"),
)
DEFAULT_BEST_APPROACH = "Use clear, structured communication with specific examples"

WORK_PACES = (
    ((("achievement_drive", ">=", 75), ("self_management", ">=", 70)), "Fast-paced and deadline-driven"),
    ((("systems_thinking", ">=", 75), ("cognitive_flexibility", ">=", 70)), "Methodical with bursts of creative intensity"),
    ((("self_management", "<", 50),), "Variable, may need external structure"),
)
DEFAULT_WORK_PACE = "Steady and consistent"

WORK_ENVIRONMENTS = (
    ((("collaborative_intelligence", ">=", 75),), "Thrives in collaborative, team-based settings"),
    (
        (("collaborative_intelligence", "<", 50), ("self_management", ">=", 70)),
        "Prefers independent work with minimal supervision",
    ),
)
DEFAULT_WORK_ENVIRONMENT = "Adaptable to both team and individual work"

WORK_MOTIVATIONS = (
    ((("achievement_drive", ">=", 80),), "Driven by goals, competition, and recognition"),
    ((("learning_orientation", ">=", 80),), "Motivated by learning, growth, and new challenges"),
    ((("relationship_building", ">=", 80),), "Inspired by helping others and building relationships"),
    ((("ethical_reasoning", ">=", 80),), "Motivated by purpose and making a positive impact"),
)
DEFAULT_WORK_MOTIVATION = "Balanced motivation from multiple sources"

WORK_STRENGTHS = (
    ((("self_management", ">=", 75),), "Excellent time management and organization"),
    ((("systems_thinking", ">=", 75),), "Strong analytical and problem-solving abilities"),
    ((("cognitive_flexibility", ">=", 75),), "Adaptable and creative in approach"),
    ((("influence_style", ">=", 75),), "Natural leadership and influence"),
)

OPTIMAL_CONDITIONS = (
    ((("learning_orientation", ">=", 70),), "Access to training and development opportunities"),
    ((("achievement_drive", ">=", 70),), "Clear goals and performance metrics"),
    ((("collaborative_intelligence", ">=", 70),), "Regular team interaction and collaboration"),
    ((("risk_tolerance", ">=", 70),), "Freedom to experiment and innovate"),
)

ROLE_TENDENCIES = (
    ((("influence_style", ">=", 75), ("achievement_drive", ">=", 75)), "Natural leader who will take charge of team initiatives"),
    (
        (("collaborative_intelligence", ">=", 75), ("emotional_regulation", ">=", 75)),
        "Team harmonizer who builds bridges and resolves conflicts",
    ),
    ((("systems_thinking", ">=", 75), ("cognitive_flexibility", ">=", 75)), "Strategic thinker who provides innovative solutions"),
    ((("self_management", ">=", 75), ("ethical_reasoning", ">=", 75)), "Reliable executor who ensures quality and compliance"),
)
DEFAULT_ROLE_TENDENCY = "Flexible team member who adapts to team needs"

CONTRIBUTION_STYLES = (
    ((("learning_orientation", ">=", 70),), "Brings new ideas and keeps team updated on trends"),
    ((("relationship_building", ">=", 70),), "Strengthens team bonds and external relationships"),
    ((("achievement_drive", ">=", 70),), "Drives team performance and maintains focus on goals"),
)
DEFAULT_CONTRIBUTION_STYLE = "Consistent contributor across various team needs"

TEAM_CONFLICTS = (
    ((("collaborative_intelligence", "<", 50),), "May struggle with team consensus-building"),
    ((("emotional_regulation", "<", 50),), "Could create tension during stressful periods"),
    (
        (("achievement_drive", ">=", 85), ("collaborative_intelligence", "<", 60)),
        "May prioritize individual success over team goals",
    ),
)

IMMEDIATE_ACTIONS = (
    (
        "Fast-track this candidate through the interview process",
        "Consider for leadership development program",
    ),
    (
        "Proceed with standard interview process",
        "Identify specific role matches based on strengths",
    ),
    (
        "Conduct additional screening interview",
        "Clearly define development expectations",
    ),
)

ROLE_FIT_BULLETS = (
    ((("relationship_building", ">=", 75), ("influence_style", ">=", 70)), "Excellent fit for client-facing advisory roles"),
    ((("systems_thinking", ">=", 75), ("self_management", ">=", 75)), "Strong fit for analytical or strategic planning roles"),
    (
        (("collaborative_intelligence", ">=", 75), ("emotional_regulation", ">=", 75)),
        "Ideal for team leadership or mentorship positions",
    ),
    ((("achievement_drive", ">=", 80), ("risk_tolerance", ">=", 70)), "Perfect for business development or sales roles"),
)

MANAGEMENT_BULLETS = (
    ((("learning_orientation", ">=", 70),), "Provide continuous learning opportunities and challenges"),
    ((("achievement_drive", ">=", 70),), "Set clear, ambitious goals with regular performance feedback"),
    ((("collaborative_intelligence", ">=", 70),), "Include in team projects and collaborative initiatives"),
    ((("self_management", "<", 60),), "Provide structured oversight and regular check-ins"),
    ((("emotional_regulation", "<", 60),), "Monitor stress levels and provide support resources"),
)

LOW_ENGAGEMENT_RECOMMENDATION = (
    "Many answers were submitted very quickly; confirm key findings in a structured interview"
)
LOW_VARIETY_RECOMMENDATION = (
    "Fixed-choice answers showed little variety; probe consistency with follow-up scenarios"
)
